"""Logging configuration for the clipman CLI."""
import logging

# Debug output names the emitting module; normal output mimics a CLI error line.
DEBUG_FORMAT = "%(levelname)s [%(name)s]: %(message)s"
DEFAULT_FORMAT = "clipman: %(message)s"


def configure_logging(verbose: bool) -> None:
    """Configure the clipman logger for one invocation.

    Any handler from an earlier call is replaced, so the format follows the
    latest verbosity and output goes to the current stderr.

    Args:
        verbose: If True, log DEBUG messages with their module name;
            otherwise only warnings and errors.

    Errors are always printed to stderr regardless of verbosity.
    """
    logger = logging.getLogger("clipman")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    for old in list(logger.handlers):
        logger.removeHandler(old)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(DEBUG_FORMAT if verbose else DEFAULT_FORMAT))
    logger.addHandler(handler)

"""Logging configuration for the command line."""
import logging
import sys


def setup_logging(level: str = "WARNING") -> None:
    """Send log records to stderr at `level`, keeping REPL output on stdout clean.

    Unknown level names fall back to WARNING.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )
    logging.getLogger(__name__).debug("Logging initialized at %s level", level.upper())

"""
Logging setup for the command line front end.

Library code only creates loggers; handlers are installed here.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """Install a stderr handler on the root logger at the given level."""
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        raise ValueError(f"Invalid log level: {level}")
    logging.basicConfig(level=numeric, format=LOG_FORMAT, force=True)

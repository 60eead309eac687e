import logging
import sys
from typing import Optional, TextIO

def configure_logging(level: int = logging.INFO, stream: Optional[TextIO] = None):
    """
    Configures the root logger for the application.
    The console runner passes stderr so log lines never mix into the report.
    """
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(stream if stream is not None else sys.stdout)
        ],
        force=True
    )

def get_logger(name: str) -> logging.Logger:
    """
    Returns a logger with the specified name.
    """
    return logging.getLogger(name)

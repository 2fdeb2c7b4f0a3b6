"""
Cut Timing settings.

Values come from environment variables; an optional .env file in the
working directory is loaded first.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

# Calibration config file; None = packaged default_config.json
CONFIG_PATH = os.getenv("CUT_TIMING_CONFIG") or None

LOG_LEVEL = os.getenv("CUT_TIMING_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: str = None):
    """Configure root logging for scripts using the library."""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
        format=LOG_FORMAT
    )

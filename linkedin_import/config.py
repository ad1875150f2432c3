"""
Settings read from the environment (and a local .env file).

LINKEDIN_IMPORT_ENDPOINT   service that turns a profile URL into resume data
LINKEDIN_IMPORT_TIMEOUT    seconds before that call gives up
LINKEDIN_IMPORT_LOG_LEVEL  default level for the command line tool
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()


def env_float(name: str, default: float) -> float:
    value = os.getenv(name, "").strip()
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("Ignoring %s=%r, not a number; using %s", name, value, default)
        return default


IMPORT_ENDPOINT = os.getenv(
    "LINKEDIN_IMPORT_ENDPOINT", "http://localhost:3000/api/linkedin/import"
)
IMPORT_TIMEOUT = env_float("LINKEDIN_IMPORT_TIMEOUT", 10.0)
LOG_LEVEL = os.getenv("LINKEDIN_IMPORT_LOG_LEVEL", "INFO").upper()

# config.py
import os
import logging
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Unset means no timeout: a hung call leaves its entry analyzing.
_timeout = os.getenv("ANALYSIS_TIMEOUT_SECONDS")
ANALYSIS_TIMEOUT_SECONDS: Optional[float] = float(_timeout) if _timeout else None

TOP_TIER_SCORE = 80
PDF_MIME_TYPE = "application/pdf"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Set up root logging once for the backend process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

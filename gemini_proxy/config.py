import os
import logging

from dotenv import load_dotenv

load_dotenv()

# ----------------------
# Configuration
# ----------------------
GEMINI_API_BASE = os.getenv(
    "GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta"
)
DEFAULT_MODEL = os.getenv("DEFAULT_MODEL", "gemini-2.5-flash")
UPSTREAM_TIMEOUT = float(os.getenv("UPSTREAM_TIMEOUT", "120"))

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "4000"))
FRONTEND_ORIGINS = [
    origin.strip()
    for origin in os.getenv("FRONTEND_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]
# base64 documents inflate by a third, keep room for a ~20 MB file
MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH_MB", "30")) * 1024 * 1024

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def get_api_key():
    """Read the Gemini key at call time so serverless invocations see the current env."""
    return os.getenv("GEMINI_API_KEY") or None


def configure_logging():
    logging.basicConfig(level=LOG_LEVEL)
    # urllib3 logs full request lines, which carry the ?key= query parameter
    logging.getLogger("urllib3").setLevel(logging.WARNING)

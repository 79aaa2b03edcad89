import logging
import os

from dotenv import load_dotenv

load_dotenv()

GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
PEXELS_SEARCH_URL = "https://api.pexels.com/v1/search"
PLACEHOLDER_BASE_URL = "https://placehold.co/800x600"

MAX_PDF_BYTES = 10 * 1024 * 1024
# Multipart overhead on top of the PDF itself; anything past this is rejected by Flask.
MAX_REQUEST_BYTES = MAX_PDF_BYTES + 1024 * 1024
MAX_PROMPT_CHARS = 7000
PDF_UPLOAD_TIMEOUT = 30
IMAGE_LOAD_STAGGER_SECONDS = 0.3

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def gemini_api_key():
    return os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")


def pexels_api_key():
    return os.getenv("PEXELS_API_KEY")


def _resolve_float(name: str, default: float, low: float, high: float) -> float:
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        value = float(raw_value)
    except ValueError:
        logging.getLogger("deckgen.config").warning(
            "Ignoring non-numeric %s=%r; using %s.", name, raw_value, default
        )
        return default

    if value < low or value > high:
        logging.getLogger("deckgen.config").warning(
            "Requested %s %s out of bounds (%s-%s); clamping.", name, raw_value, low, high
        )
    return max(low, min(high, value))


def gemini_temperature() -> float:
    return _resolve_float("GEMINI_TEMPERATURE", 0.7, 0.0, 2.0)


def image_request_timeout() -> float:
    return _resolve_float("IMAGE_REQUEST_TIMEOUT", 10.0, 1.0, 30.0)

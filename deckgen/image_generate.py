import logging
import time
from typing import Dict, List, Optional
from urllib.parse import quote

import requests
from flask import current_app

from . import config
from .errors import UpstreamError
from .themes import PLACEHOLDER_THEMES

_REQUEST_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/123.0 Safari/537.36"
    )
}
MAX_PHOTOS = 3
# Left unescaped in the placeholder text, matching browser URI-component encoding.
_URI_SAFE = "!*'()"


def _logger() -> logging.Logger:
    try:
        return current_app.logger
    except RuntimeError:
        return logging.getLogger("deckgen.images")


def _timestamp_ms() -> int:
    return int(time.time() * 1000)


def placeholder_theme_index(term: str) -> int:
    """Same term, same colours: keyed on the first UTF-16 code unit only."""
    if not term:
        return 0
    code = ord(term[0])
    if code >= 0x10000:
        # high surrogate of an astral character, as browsers report charCodeAt(0)
        code = 0xD800 + ((code - 0x10000) >> 10)
    return code % len(PLACEHOLDER_THEMES)


def placeholder_url(term: str, bg_color: str, text_color: str, timestamp: Optional[int] = None) -> str:
    if timestamp is None:
        timestamp = _timestamp_ms()
    return (
        f"{config.PLACEHOLDER_BASE_URL}/{bg_color.lstrip('#')}/{text_color.lstrip('#')}"
        f"?text={quote(term, safe=_URI_SAFE)}&t={timestamp}"
    )


def placeholder_image(term: str) -> Dict[str, object]:
    term = (term or "").strip()
    theme = PLACEHOLDER_THEMES[placeholder_theme_index(term)]
    timestamp = _timestamp_ms()
    return {
        "imageUrl": placeholder_url(term, theme["bgColor"], theme["textColor"], timestamp),
        "searchTerm": term,
        "timestamp": timestamp,
        "source": "placeholder",
    }


def search_pexels(term: str, per_page: int = 10) -> List[Dict[str, object]]:
    """Largest landscape photos first; raises UpstreamError when nothing usable comes back."""
    api_key = config.pexels_api_key()
    if not api_key:
        raise UpstreamError("Pexels API key not configured")

    try:
        response = requests.get(
            config.PEXELS_SEARCH_URL,
            params={"query": term, "per_page": per_page, "orientation": "landscape"},
            headers={**_REQUEST_HEADERS, "Authorization": api_key},
            timeout=config.image_request_timeout(),
        )
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as exc:
        raise UpstreamError(f"Failed to fetch images from Pexels: {exc}") from exc

    photos = data.get("photos") if isinstance(data, dict) else None
    photos = [p for p in photos or [] if isinstance(p, dict)]
    if not photos:
        raise UpstreamError("No images found on Pexels")

    ranked = sorted(
        photos,
        key=lambda p: (p.get("width") or 0) * (p.get("height") or 0),
        reverse=True,
    )
    return [
        {
            "id": photo.get("id"),
            "width": photo.get("width"),
            "height": photo.get("height"),
            "url": photo.get("url"),
            "photographer": photo.get("photographer"),
            "photographer_url": photo.get("photographer_url"),
            "src": photo.get("src") if isinstance(photo.get("src"), dict) else {},
            "alt": photo.get("alt") or term,
        }
        for photo in ranked[:MAX_PHOTOS]
    ]


def _pexels_image(term: str) -> Dict[str, object]:
    photos = search_pexels(term)
    best = photos[0]
    src = best["src"]
    image_url = src.get("large2x") or src.get("large") or src.get("medium")
    if not image_url:
        raise UpstreamError("Pexels photo carried no usable source URL")

    return {
        "imageUrl": image_url,
        "thumbnails": [p["src"].get("small") for p in photos if p["src"].get("small")],
        "alt": best["alt"],
        "searchTerm": term,
        "timestamp": _timestamp_ms(),
        "attribution": {
            "photographer": best["photographer"],
            "photographerUrl": best["photographer_url"],
            "source": "Pexels",
            "sourceUrl": best["url"],
        },
        "source": "pexels",
    }


def resolve_image(term: str) -> Dict[str, object]:
    term = (term or "").strip()
    try:
        result = _pexels_image(term)
        _logger().info("Found Pexels image for %r", term)
        return result
    except UpstreamError as exc:
        _logger().info("Using placeholder image for %r: %s", term, exc)
        return placeholder_image(term)

import json
import logging
import re
from typing import List, Optional

from flask import current_app
from google import genai
from google.genai import types

from . import config
from .assembler import MAX_POINTS_PER_SLIDE, MAX_SLIDES, Slide
from .errors import UpstreamError
from .prompt import givePrompt

_JSON_BLOCK_PATTERN = re.compile(r"\{.*\}", re.DOTALL)
GENERIC_POINT = "Key information for this section"


def _logger() -> logging.Logger:
    try:
        return current_app.logger
    except RuntimeError:
        return logging.getLogger("deckgen.gemini")


def _normalize_quotes(value: str) -> str:
    if not isinstance(value, str):
        return value
    return (
        value.replace("“", '"')
        .replace("”", '"')
        .replace("’", "'")
        .replace("‘", "'")
    )


def _escape_inner_quotes(json_text: str) -> str:
    result: list[str] = []
    in_string = False
    escape = False

    for idx, char in enumerate(json_text):
        if char == '"' and not escape:
            if in_string:
                look_ahead_index = idx + 1
                while look_ahead_index < len(json_text) and json_text[look_ahead_index].isspace():
                    look_ahead_index += 1
                next_char = json_text[look_ahead_index] if look_ahead_index < len(json_text) else ""
                if next_char and next_char not in ",}]:":
                    result.append('\\"')
                    continue
                in_string = False
                result.append(char)
            else:
                in_string = True
                result.append(char)
        else:
            result.append(char)

        if char == "\\" and not escape:
            escape = True
        elif escape:
            escape = False

    return "".join(result)


def parse_response_json(response_text: str) -> dict:
    """Pull the outermost JSON object out of model text, repairing stray quotes once."""
    match = _JSON_BLOCK_PATTERN.search(response_text or "")
    if not match:
        raise UpstreamError("No JSON object found in Gemini response")

    normalized = _normalize_quotes(match.group(0))
    try:
        return json.loads(normalized, strict=False)
    except json.JSONDecodeError:
        repaired = _escape_inner_quotes(normalized)
        try:
            return json.loads(repaired, strict=False)
        except json.JSONDecodeError as err:
            raise UpstreamError(f"Failed to parse JSON from Gemini response: {err}") from err


def slides_from_response(presentation_json: dict) -> List[Slide]:
    raw_slides = presentation_json.get("slides") if isinstance(presentation_json, dict) else None
    if not isinstance(raw_slides, list) or not raw_slides:
        raise UpstreamError("Invalid response format from AI: missing 'slides' list")

    slides: List[Slide] = []
    for index, raw in enumerate(raw_slides[:MAX_SLIDES], start=1):
        if not isinstance(raw, dict):
            raise UpstreamError(f"Invalid slide at position {index} in AI response")

        heading = raw.get("heading") or raw.get("title")
        heading = heading.strip() if isinstance(heading, str) and heading.strip() else f"Slide {index}"

        raw_points = raw.get("points")
        points = [
            str(point).strip()
            for point in (raw_points if isinstance(raw_points, list) else [])
            if str(point).strip()
        ][:MAX_POINTS_PER_SLIDE]

        image_term = raw.get("imageDescription") or raw.get("image") or heading
        slides.append(
            Slide(
                index=index,
                heading=heading,
                points=points or [GENERIC_POINT],
                image_term=str(image_term).strip() or heading,
            )
        )

    return slides


def generate_slides(title: str = "", content: str = "", input_method: str = "text") -> List[Slide]:
    api_key = config.gemini_api_key()
    if not api_key:
        raise UpstreamError("GEMINI_API_KEY is not set; Gemini generation unavailable")

    contents = givePrompt(title, content, input_method)

    try:
        client = genai.Client(api_key=api_key)
        response = client.models.generate_content(
            model=config.GEMINI_MODEL,
            contents=contents,
            config=types.GenerateContentConfig(
                temperature=config.gemini_temperature(),
                max_output_tokens=4000,
                response_mime_type="application/json",
            ),
        )
    except Exception as exc:
        raise UpstreamError(f"Gemini request failed: {exc}") from exc

    response_text: Optional[str] = getattr(response, "text", None)
    if not response_text:
        raise UpstreamError("Gemini returned an empty response")

    _logger().debug("Received raw response from Gemini: %s", response_text)
    return slides_from_response(parse_response_json(response_text))

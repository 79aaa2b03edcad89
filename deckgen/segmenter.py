"""Heuristic splitting of free-form text into slide sections.

Used when Gemini is unavailable. Each pass is a pure function that returns a
list of sections, an empty list meaning "no sections found"; ``parse_content``
runs them in order and keeps the first non-empty result.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, List, Optional

MIN_POINT_CHARS = 15
MAX_POINT_CHARS = 200
MAX_HEADING_CHARS = 100
MIN_INTRO_CHARS = 20
MAX_INTRO_CHARS = 150
MIN_PARAGRAPH_CHARS = 30
MAX_CHUNK_HEADING_CHARS = 50
CHUNK_SIZE = 500
MAX_POINTS = 5
TITLE_SCAN_LINES = 5
GENERIC_POINT = "Key information for this section"

_LINE_BREAK = re.compile(r"\r?\n")
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_LIST_MARKER = re.compile(r"^[-•*]\s*")
_LEADING_SENTENCE = re.compile(r"^([^.!?]+[.!?])\s*([\s\S]*)")
_SENTENCE_BREAK = re.compile(r"[.!?]+\s+")
_TRAILING_TERMINATORS = re.compile(r"[.!?]+$")


@dataclass
class Section:
    heading: str
    points: List[str] = field(default_factory=list)


@dataclass
class ParsedDocument:
    title: Optional[str] = None
    introduction: Optional[str] = None
    sections: List[Section] = field(default_factory=list)


def _non_blank_lines(text: str) -> List[str]:
    return [line.strip() for line in _LINE_BREAK.split(text) if line.strip()]


def _is_point_length(value: str) -> bool:
    return MIN_POINT_CHARS <= len(value) < MAX_POINT_CHARS


def _ellipsize(value: str, limit: int) -> str:
    return value[:limit] + ("..." if len(value) > limit else "")


def _split_sentences(text: str) -> List[str]:
    return _SENTENCE_BREAK.split(text)


def is_heading(line: str) -> bool:
    """Short line, no trailing period, not starting with a lower-case letter."""
    if not line or len(line) >= MAX_HEADING_CHARS or line.endswith("."):
        return False
    return line[0] == line[0].upper() or line == line.upper()


def detect_title(text: str) -> Optional[str]:
    for line in _non_blank_lines(text)[:TITLE_SCAN_LINES]:
        if len(line) < MAX_HEADING_CHARS and not line.endswith("."):
            return line
    return None


def detect_introduction(text: str) -> Optional[str]:
    """First long-enough line that appears before any heading."""
    for line in _non_blank_lines(text):
        if is_heading(line):
            return None
        if len(line) > MIN_INTRO_CHARS:
            return _ellipsize(line, MAX_INTRO_CHARS)
    return None


def sections_from_headings(text: str) -> List[Section]:
    sections: List[Section] = []
    current: Optional[Section] = None

    for line in _non_blank_lines(text):
        if is_heading(line):
            if current and current.points:
                sections.append(current)
            current = Section(heading=line)
        elif current:
            point = _LIST_MARKER.sub("", line).strip()
            if _is_point_length(point):
                current.points.append(point)

    if current and current.points:
        sections.append(current)
    return sections


def sections_from_paragraphs(text: str) -> List[Section]:
    sections: List[Section] = []

    for paragraph in _PARAGRAPH_BREAK.split(text):
        if len(paragraph.strip()) < MIN_PARAGRAPH_CHARS:
            continue

        match = _LEADING_SENTENCE.match(paragraph)
        if not match:
            continue

        heading = _TRAILING_TERMINATORS.sub("", match.group(1).strip())
        if not heading:
            continue
        remainder = match.group(2).strip()

        points = [
            sentence.strip()
            for sentence in _split_sentences(remainder)
            if _is_point_length(sentence.strip())
        ][:MAX_POINTS]
        if not points:
            points = [remainder[:MAX_INTRO_CHARS] + "..."]

        sections.append(Section(heading=heading, points=points))

    return sections


def _chunks(text: str, size: int) -> List[str]:
    return [text[start:start + size] for start in range(0, len(text), size)]


def sections_from_chunks(text: str) -> List[Section]:
    sections: List[Section] = []

    for index, chunk in enumerate(_chunks(text, CHUNK_SIZE)):
        sentences = [s for s in _split_sentences(chunk) if s.strip()]
        if not sentences:
            continue

        heading = sentences[0].strip()
        if len(heading) > MAX_CHUNK_HEADING_CHARS:
            heading = f"Section {index + 1}"

        points = [
            sentence.strip()
            for sentence in sentences[1:]
            if _is_point_length(sentence.strip())
        ][:MAX_POINTS]

        sections.append(Section(heading=heading, points=points or [GENERIC_POINT]))

    return sections


SECTION_PASSES: List[Callable[[str], List[Section]]] = [
    sections_from_headings,
    sections_from_paragraphs,
    sections_from_chunks,
]


def parse_content(text: str) -> ParsedDocument:
    text = text or ""
    document = ParsedDocument(
        title=detect_title(text),
        introduction=detect_introduction(text),
    )

    for section_pass in SECTION_PASSES:
        sections = section_pass(text)
        if sections:
            document.sections = sections
            break

    return document

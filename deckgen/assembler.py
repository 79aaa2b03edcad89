"""Turns segmenter output (or a bare title) into the slides returned to the UI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import InputError
from .segmenter import ParsedDocument, parse_content

MAX_SLIDES = 4
MAX_POINTS_PER_SLIDE = 5
MAX_SUMMARY_HEADINGS = 3
DEFAULT_HEADING = "Presentation"


@dataclass
class Slide:
    index: int
    heading: str
    points: List[str] = field(default_factory=list)
    image_term: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slide": self.index,
            "heading": self.heading,
            "points": list(self.points),
            "image": self.image_term,
        }

    @classmethod
    def from_dict(cls, data: Any, fallback_index: int = 1) -> "Slide":
        if not isinstance(data, dict):
            raise InputError("Each slide must be a JSON object")

        heading = data.get("heading")
        if not isinstance(heading, str) or not heading.strip():
            raise InputError(f"Slide {fallback_index} is missing a heading")

        points = data.get("points") or []
        if not isinstance(points, list) or not all(isinstance(p, str) for p in points):
            raise InputError(f"Slide {fallback_index} points must be a list of strings")

        index = data.get("slide")
        if not isinstance(index, int) or isinstance(index, bool) or index < 1:
            index = fallback_index

        image_term = data.get("image") or data.get("imageTerm") or heading
        return cls(index=index, heading=heading.strip(), points=points, image_term=str(image_term))


def slides_from_payload(payload: Any) -> List[Slide]:
    if not isinstance(payload, list) or not payload:
        raise InputError("slides must be a non-empty list")
    return [Slide.from_dict(item, fallback_index=i + 1) for i, item in enumerate(payload)]


def _title_only_slides(title: str) -> List[Slide]:
    return [
        Slide(
            index=1,
            heading=title,
            points=[
                f"Introduction to {title}",
                "Key concepts and definitions",
                "Overview of main topics",
            ],
            image_term=title,
        ),
        Slide(
            index=2,
            heading="Key Points",
            points=[f"Main point {n} about {title}" for n in (1, 2, 3)],
            image_term=f"{title} key points",
        ),
        Slide(
            index=3,
            heading="Conclusion",
            points=[f"Summary of {title}", "Future directions", "Questions and discussion"],
            image_term=f"{title} conclusion",
        ),
    ]


def slides_from_document(document: ParsedDocument, title: Optional[str] = None) -> List[Slide]:
    """Overview slide, one slide per section, then a summary when there were sections."""
    slides = [
        Slide(
            index=1,
            heading=title or document.title or DEFAULT_HEADING,
            points=[
                document.introduction or "Introduction",
                "Key topics covered",
                "Generated from content",
            ],
            image_term=document.title or title or "presentation",
        )
    ]

    for section in document.sections:
        slides.append(
            Slide(
                index=len(slides) + 1,
                heading=section.heading,
                points=section.points[:MAX_POINTS_PER_SLIDE],
                image_term=section.heading,
            )
        )

    if document.sections:
        slides.append(
            Slide(
                index=len(slides) + 1,
                heading="Summary",
                points=["Key takeaways"]
                + [s.heading for s in document.sections[:MAX_SUMMARY_HEADINGS]],
                image_term="summary",
            )
        )

    return slides[:MAX_SLIDES]


def placeholder_slide(title: Optional[str] = None) -> Slide:
    return Slide(
        index=1,
        heading=title or DEFAULT_HEADING,
        points=[
            "No content was provided",
            "Please add more details to generate a complete presentation",
            "You can edit this slide",
        ],
        image_term="empty presentation",
    )


def build_slides(
    title: Optional[str] = None,
    content: Optional[str] = None,
    input_method: Optional[str] = None,
) -> List[Slide]:
    title = (title or "").strip()
    content = content or ""

    if input_method is None:
        input_method = "title" if title and not content.strip() else "text"

    slides: List[Slide] = []
    if input_method == "title" and title:
        slides = _title_only_slides(title)
    elif content:
        slides = slides_from_document(parse_content(content), title or None)

    if not slides:
        slides = [placeholder_slide(title or None)]

    return slides[:MAX_SLIDES]

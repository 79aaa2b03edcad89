"""Utility wrapper for generating a deck from a title, text or PDF."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from . import gemini_generate
from .assembler import Slide, build_slides
from .client import DeckClient
from .errors import InputError, UpstreamError
from .image_generate import resolve_image
from .pdf_extract import extract_pdf_text
from .themes import DEFAULT_THEME, PRESENTATION_THEMES
from .viewer import PresentationViewer

logger = logging.getLogger("deckgen.run_deck")


def run_deck(title: str | None = None, content: str | None = None, input_method: str | None = None) -> List[Slide]:
    """Ask Gemini for slides; fall back to the local segmenter when it is unavailable."""
    title = (title or "").strip()
    content = content or ""
    if not title and not content.strip():
        raise InputError("Either title or content is required")

    if input_method is None:
        input_method = "title" if not content.strip() else "text"

    try:
        return gemini_generate.generate_slides(title, content, input_method)
    except UpstreamError as exc:
        logger.warning("Gemini unavailable, falling back to local processing: %s", exc)
        return build_slides(title, content, input_method)


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a slide deck and write it as HTML.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--text-file", type=Path, help="Plain-text file whose content drives the deck.")
    source.add_argument("--pdf", type=Path, help="PDF whose extracted text drives the deck.")
    parser.add_argument("--title", default="", help="Presentation title (enough on its own for a 3-slide deck).")
    parser.add_argument("--theme", default=DEFAULT_THEME, choices=sorted(PRESENTATION_THEMES))
    parser.add_argument("--output", type=Path, default=Path("presentation.html"))
    parser.add_argument(
        "--server",
        help="Base URL of a running deck service (e.g. http://localhost:5000); generate locally when omitted.",
    )
    parser.add_argument(
        "--no-images",
        dest="include_images",
        action="store_false",
        help="Skip image lookups and use placeholders.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> Path:
    args = _parse_args(argv)
    client = DeckClient(args.server) if args.server else None

    content = ""
    input_method = "title"
    if args.text_file:
        content = args.text_file.read_text(encoding="utf-8")
        input_method = "text"
    elif args.pdf:
        if client:
            content = client.extract_pdf(args.pdf)["text"]
        else:
            content = extract_pdf_text(args.pdf.read_bytes())["text"]
        input_method = "pdf"

    if client:
        logger.info("Generating slides via %s", args.server)
        slides = client.generate_slides(args.title, content, input_method)
        resolver = client.resolve_image
    else:
        slides = run_deck(args.title, content, input_method)
        resolver = resolve_image

    viewer = PresentationViewer(slides, resolver=resolver, theme=args.theme)
    if args.include_images:
        viewer.load_images()

    args.output.write_text(viewer.export_html(), encoding="utf-8")
    print(f"Presentation with {len(slides)} slide(s) written to: {args.output}")
    return args.output


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    main()

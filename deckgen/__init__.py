"""Slide deck generation service: Gemini first, heuristic segmenter as fallback."""

__version__ = "0.3.0"

"""Presentation preview state.

``PresentationViewer`` exclusively owns its ``ViewerState``: the current slide,
the per-slide image cache, and loading flags. Nothing else mutates it.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional
from urllib.parse import quote_plus

from .assembler import Slide
from .config import IMAGE_LOAD_STAGGER_SECONDS
from .errors import InputError
from .export import render_html
from .image_generate import placeholder_url
from .themes import DEFAULT_THEME, get_theme

logger = logging.getLogger("deckgen.viewer")

ImageResolver = Callable[[str], Dict[str, object]]


@dataclass
class SlideImage:
    url: str
    alt: str
    source: Optional[str] = None
    attribution: Optional[Dict[str, object]] = None
    thumbnails: List[str] = field(default_factory=list)


@dataclass
class ViewerState:
    current_index: int = 0
    images: Dict[int, SlideImage] = field(default_factory=dict)
    loading: Dict[int, bool] = field(default_factory=dict)
    error: Optional[str] = None
    theme: str = DEFAULT_THEME


class PresentationViewer:
    def __init__(self, slides: List[Slide], resolver: ImageResolver, theme: str = DEFAULT_THEME,
                 sleep: Callable[[float], None] = time.sleep):
        if not slides:
            raise InputError("A presentation needs at least one slide")
        get_theme(theme)
        self.slides = list(slides)
        self._resolver = resolver
        self._sleep = sleep
        self._state = ViewerState(theme=theme)

    @property
    def state(self) -> ViewerState:
        return self._state

    @property
    def current_slide(self) -> Slide:
        return self.slides[self._state.current_index]

    @property
    def can_go_back(self) -> bool:
        return self._state.current_index > 0

    @property
    def can_go_forward(self) -> bool:
        return self._state.current_index < len(self.slides) - 1

    def prev_slide(self) -> Slide:
        if self.can_go_back:
            self._state.current_index -= 1
        return self.current_slide

    def next_slide(self) -> Slide:
        if self.can_go_forward:
            self._state.current_index += 1
        return self.current_slide

    def go_to(self, index: int) -> Slide:
        if not 0 <= index < len(self.slides):
            raise InputError(f"Slide index {index} out of range (0-{len(self.slides) - 1})")
        self._state.current_index = index
        return self.current_slide

    def handle_key(self, key: str) -> Slide:
        if key == "ArrowLeft":
            return self.prev_slide()
        if key == "ArrowRight":
            return self.next_slide()
        return self.current_slide

    def set_theme(self, name: str) -> None:
        get_theme(name)
        self._state.theme = name

    def placeholder_url(self, index: int) -> str:
        theme = get_theme(self._state.theme)
        return placeholder_url(self.slides[index].image_term, theme["bgColor"], theme["textColor"])

    def load_image(self, index: int) -> Optional[SlideImage]:
        if self._state.loading.get(index):
            return self._state.images.get(index)

        term = self.slides[index].image_term
        self._state.loading[index] = True
        self._state.error = None
        try:
            try:
                data = self._resolver(term)
                image = SlideImage(
                    url=str(data["imageUrl"]),
                    alt=str(data.get("alt") or term),
                    source=data.get("source"),
                    attribution=data.get("attribution"),
                    thumbnails=list(data.get("thumbnails") or []),
                )
            except Exception as exc:
                logger.warning("Image lookup failed for slide %d (%r), using placeholder: %s", index, term, exc)
                image = SlideImage(url=self.placeholder_url(index), alt=term, source="placeholder")
            self._state.images[index] = image
            return image
        finally:
            self._state.loading[index] = False

    def load_images(self) -> Dict[int, SlideImage]:
        """One lookup per uncached slide; the nth starts roughly n * 300ms after the first."""
        started = time.monotonic()
        for index in range(len(self.slides)):
            if index in self._state.images:
                continue
            wait = index * IMAGE_LOAD_STAGGER_SECONDS - (time.monotonic() - started)
            if wait > 0:
                self._sleep(wait)
            self.load_image(index)
        return dict(self._state.images)

    def refresh_current_image(self) -> Optional[SlideImage]:
        return self.load_image(self._state.current_index)

    def image_url(self, index: int) -> str:
        image = self._state.images.get(index)
        return image.url if image else self.placeholder_url(index)

    def more_images_url(self) -> str:
        return f"https://www.google.com/search?q={quote_plus(self.current_slide.image_term)}&tbm=isch"

    def export_html(self) -> str:
        images = {index: image.url for index, image in self._state.images.items()}
        return render_html(self.slides, theme_name=self._state.theme, images=images)

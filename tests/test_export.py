import io
import zipfile

import pytest

from deckgen.assembler import Slide
from deckgen.errors import InputError
from deckgen.export import build_package, build_pdf, normalize_image_map, render_html, resolve_image_urls


@pytest.fixture
def slides():
    return [
        Slide(1, "Intro <script>alert(1)</script>", ["First & foremost"], "intro"),
        Slide(2, "Wrap up", ["Questions"], "questions"),
    ]


def test_render_html_escapes_slide_text(slides):
    html = render_html(slides)

    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;" in html
    assert "First &amp; foremost" in html


def test_render_html_numbers_slides_and_applies_theme(slides):
    html = render_html(slides, theme_name="corporate")

    assert "Slide 1 / 2" in html
    assert "Slide 2 / 2" in html
    assert "font-family: 'Segoe UI', sans-serif" in html
    assert "#0078d4" in html


def test_render_html_uses_cached_images(slides):
    html = render_html(slides, images={1: "https://images.example/wrap.jpg"})

    assert 'src="https://images.example/wrap.jpg"' in html
    assert "placehold.co/800x600/ffffff/333333?text=intro" in html


def test_unknown_theme_is_rejected(slides):
    with pytest.raises(InputError):
        render_html(slides, theme_name="neon")


def test_placeholders_follow_theme_colours(slides):
    urls = resolve_image_urls(slides, theme_name="dark")

    assert all("/1e1e1e/e0e0e0?" in url for url in urls)


def test_build_package_contents(slides):
    archive = zipfile.ZipFile(io.BytesIO(build_package(slides)))

    assert sorted(archive.namelist()) == ["conversion_instructions.txt", "presentation.html"]
    html = archive.read("presentation.html").decode("utf-8")
    assert "ProgId content=PowerPoint.Slide" in html
    assert "Wrap up" in html
    assert b"Slides from Outline" in archive.read("conversion_instructions.txt")


def test_build_pdf_produces_pdf_bytes(slides):
    payload = build_pdf(slides + [Slide(3, "No points", [], "empty")])

    assert payload.startswith(b"%PDF")


def test_normalize_image_map():
    raw = {"0": "https://a.jpg", "1": "", "two": "https://b.jpg", "3": 42, 4: "https://c.jpg"}

    assert normalize_image_map(raw) == {0: "https://a.jpg", 4: "https://c.jpg"}
    assert normalize_image_map(["https://a.jpg"]) == {}
    assert normalize_image_map(None) == {}

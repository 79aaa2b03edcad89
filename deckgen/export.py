"""Static exports of a generated deck: themed HTML, a zipped PowerPoint-friendly
package, and a printable PDF handout."""

from __future__ import annotations

import io
import zipfile
from typing import Dict, List, Mapping, Optional
from xml.sax.saxutils import escape

from jinja2 import Environment
from reportlab.lib.pagesizes import landscape, letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import ListFlowable, ListItem, PageBreak, Paragraph, SimpleDocTemplate, Spacer

from .assembler import Slide
from .image_generate import placeholder_url
from .themes import get_theme

_env = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)

HTML_TEMPLATE = _env.from_string("""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>{{ title }}</title>
  <style>
    @import url('https://fonts.googleapis.com/css2?family=Roboto:wght@400;500;700&family=Poppins:wght@400;500;700&display=swap');
    body { font-family: {{ theme.fontFamily|safe }}; margin: 0; padding: 0; color: {{ theme.textColor|safe }}; background-color: #f0f0f0; }
    .slide-container { width: 1280px; height: 720px; margin: 2rem auto; overflow: hidden; }
    .slide { width: 1280px; height: 720px; page-break-after: always; padding: 0; box-sizing: border-box; background: {{ theme.slideGradient|safe }}; box-shadow: {{ theme.boxShadow|safe }}; position: relative; overflow: hidden; }
    .slide-header { background-color: {{ theme.headerBg|safe }}; padding: 40px 60px 20px; position: relative; }
    .slide-title { font-size: 44px; margin: 0; color: {{ theme.accentColor|safe }}; font-weight: 700; }
    .slide-content { display: flex; padding: 20px 60px 40px; height: calc(100% - 120px); }
    .slide-points { flex: 1; padding-right: 40px; }
    .slide-image { flex: 1; display: flex; justify-content: center; align-items: center; padding: 20px; }
    .slide-image img { max-width: 100%; max-height: 500px; border-radius: 4px; box-shadow: 0 4px 20px rgba(0, 0, 0, 0.15); }
    .points-list { margin: 0; padding: 0; list-style-type: none; }
    .points-list li { margin-bottom: 24px; font-size: 28px; line-height: 1.4; position: relative; padding-left: 40px; }
    .points-list li:before { content: ""; position: absolute; left: 0; top: 14px; width: 12px; height: 12px; background-color: {{ theme.accentColor|safe }}; border-radius: 50%; }
    .slide-number { position: absolute; bottom: 20px; right: 20px; font-size: 16px; color: {{ theme.textColor|safe }}80; }
    .footer { position: absolute; bottom: 0; left: 0; right: 0; height: 16px; background-color: {{ theme.accentColor|safe }}; }
    @media print {
      body { background-color: white; }
      .slide-container { margin: 0; }
      .slide { page-break-after: always; margin: 0; box-shadow: none; }
    }
  </style>
</head>
<body>
{% for slide in slides %}
  <div class="slide-container">
    <div class="slide">
      <div class="slide-header">
        <h1 class="slide-title">{{ slide.heading }}</h1>
      </div>
      <div class="slide-content">
        <div class="slide-points">
          <ul class="points-list">
          {% for point in slide.points %}
            <li>{{ point }}</li>
          {% endfor %}
          </ul>
        </div>
        <div class="slide-image">
          <img src="{{ image_urls[loop.index0] }}" alt="{{ slide.image_term }}">
        </div>
      </div>
      <div class="slide-number">Slide {{ loop.index }} / {{ slides|length }}</div>
      <div class="footer"></div>
    </div>
  </div>
{% endfor %}
</body>
</html>
""")

PACKAGE_HTML_TEMPLATE = _env.from_string("""<html xmlns:v="urn:schemas-microsoft-com:vml"
xmlns:o="urn:schemas-microsoft-com:office:office"
xmlns:p="urn:schemas-microsoft-com:office:powerpoint"
xmlns="http://www.w3.org/TR/REC-html40">
<head>
  <meta http-equiv=Content-Type content="text/html; charset=utf-8">
  <meta name=ProgId content=PowerPoint.Slide>
  <style>
    div.slide { page-break-after: always }
  </style>
</head>
<body>
{% for slide in slides %}
  <div class="slide">
    <h1>{{ slide.heading }}</h1>
    <ul>
    {% for point in slide.points %}
      <li>{{ point }}</li>
    {% endfor %}
    </ul>
    <img src="{{ image_urls[loop.index0] }}" alt="{{ slide.image_term }}" width="400">
  </div>
{% endfor %}
</body>
</html>
""")

CONVERSION_INSTRUCTIONS = """==========================================
POWERPOINT PRESENTATION - CONVERSION GUIDE
==========================================

To convert this to a PowerPoint presentation:

1. Open the provided HTML file in Microsoft Word
2. Use File > Save As and select PowerPoint format (.pptx)
3. Word will convert the file to PowerPoint format

Alternative method:
1. Open PowerPoint
2. Create a new presentation
3. Go to Home > New Slide > Slides from Outline
4. Select the .html file

Note: Some manual formatting may be required after conversion.
==========================================
"""


def resolve_image_urls(
    slides: List[Slide],
    images: Optional[Mapping[int, str]] = None,
    theme_name: Optional[str] = None,
) -> List[str]:
    """Cached image per slide position, otherwise a placeholder in the theme's colours."""
    theme = get_theme(theme_name)
    images = images or {}
    return [
        images.get(position)
        or placeholder_url(slide.image_term, theme["bgColor"], theme["textColor"])
        for position, slide in enumerate(slides)
    ]


def render_html(
    slides: List[Slide],
    theme_name: Optional[str] = None,
    images: Optional[Mapping[int, str]] = None,
    title: str = "Presentation",
) -> str:
    return HTML_TEMPLATE.render(
        title=title,
        theme=get_theme(theme_name),
        slides=slides,
        image_urls=resolve_image_urls(slides, images, theme_name),
    )


def build_package(
    slides: List[Slide],
    theme_name: Optional[str] = None,
    images: Optional[Mapping[int, str]] = None,
) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(
            "presentation.html",
            PACKAGE_HTML_TEMPLATE.render(
                slides=slides,
                image_urls=resolve_image_urls(slides, images, theme_name),
            ),
        )
        archive.writestr("conversion_instructions.txt", CONVERSION_INSTRUCTIONS)
    return buffer.getvalue()


def build_pdf(slides: List[Slide], title: str = "Presentation") -> bytes:
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(letter),
        rightMargin=0.75 * inch,
        leftMargin=0.75 * inch,
        topMargin=0.75 * inch,
        bottomMargin=0.75 * inch,
        title=title,
    )

    styles = getSampleStyleSheet()
    style_heading = styles["Heading1"]
    style_normal = styles["Normal"]
    style_caption = styles["Italic"]

    story = []
    for position, slide in enumerate(slides, start=1):
        story.append(Paragraph(escape(slide.heading), style_heading))
        story.append(Spacer(1, 0.2 * inch))
        if slide.points:
            story.append(
                ListFlowable(
                    [ListItem(Paragraph(escape(point), style_normal)) for point in slide.points],
                    bulletType="bullet",
                )
            )
        story.append(Spacer(1, 0.3 * inch))
        story.append(Paragraph(f"Slide {position} / {len(slides)}", style_caption))
        if position < len(slides):
            story.append(PageBreak())

    doc.build(story)
    return buffer.getvalue()


def normalize_image_map(raw: object) -> Dict[int, str]:
    """JSON object keys arrive as strings; keep only int-like keys with string URLs."""
    if not isinstance(raw, dict):
        return {}
    images: Dict[int, str] = {}
    for key, value in raw.items():
        try:
            position = int(key)
        except (TypeError, ValueError):
            continue
        if isinstance(value, str) and value:
            images[position] = value
    return images

import json

import pytest

from deckgen import gemini_generate
from deckgen.errors import InputError, UpstreamError
from deckgen.prompt import givePrompt


def _payload(count):
    return json.dumps({
        "slides": [
            {"heading": f"Heading {n}", "points": [f"Point {n}.{m}" for m in range(3)], "imageDescription": f"image {n}"}
            for n in range(1, count + 1)
        ]
    })


def test_missing_key_is_an_upstream_error():
    with pytest.raises(UpstreamError):
        gemini_generate.generate_slides("Solar Power", "", "title")


def test_generate_slides_maps_response(fake_gemini):
    fake_gemini.text = _payload(2)

    slides = gemini_generate.generate_slides("Solar Power", "", "title")

    assert [s.heading for s in slides] == ["Heading 1", "Heading 2"]
    assert [s.index for s in slides] == [1, 2]
    assert slides[0].points == ["Point 1.0", "Point 1.1", "Point 1.2"]
    assert slides[1].image_term == "image 2"
    assert 'Create a presentation about "Solar Power"' in fake_gemini.calls[0]["contents"]


def test_generate_slides_caps_at_four(fake_gemini):
    fake_gemini.text = _payload(6)

    assert len(gemini_generate.generate_slides("", "some long content here", "text")) == 4


def test_generate_slides_fills_missing_fields(fake_gemini):
    fake_gemini.text = json.dumps({"slides": [{"points": []}, {"heading": "Next", "points": "oops"}]})

    slides = gemini_generate.generate_slides("Topic", "", "title")

    assert slides[0].heading == "Slide 1"
    assert slides[0].points == [gemini_generate.GENERIC_POINT]
    assert slides[0].image_term == "Slide 1"
    assert slides[1].points == [gemini_generate.GENERIC_POINT]


def test_generate_slides_accepts_fenced_json(fake_gemini):
    fake_gemini.text = "Here you go:\n```json\n" + _payload(1) + "\n```"

    assert gemini_generate.generate_slides("Topic", "", "title")[0].heading == "Heading 1"


@pytest.mark.parametrize("text", ["", "no json at all", '{"slides": []}', '{"other": 1}', "{broken"])
def test_unusable_responses_raise_upstream_error(fake_gemini, text):
    fake_gemini.text = text

    with pytest.raises(UpstreamError):
        gemini_generate.generate_slides("Topic", "", "title")


def test_client_failure_becomes_upstream_error(fake_gemini):
    fake_gemini.error = ConnectionError("network down")

    with pytest.raises(UpstreamError, match="network down"):
        gemini_generate.generate_slides("Topic", "", "title")


def test_parse_response_json_normalizes_curly_quotes():
    text = '{“slides”: [{“heading”: “Curly”, “points”: [“one”]}]}'

    assert gemini_generate.parse_response_json(text)["slides"][0]["heading"] == "Curly"


def test_parse_response_json_repairs_inner_quotes():
    text = '{"slides": [{"heading": "The "best" plan", "points": ["a"]}]}'

    assert gemini_generate.parse_response_json(text)["slides"][0]["heading"] == 'The "best" plan'


def test_prompt_truncates_content():
    prompt = givePrompt("", "x" * 9000, "text")

    assert "x" * 7000 in prompt
    assert "x" * 7001 not in prompt
    assert '"imageDescription"' in prompt


def test_prompt_requires_title_or_content():
    with pytest.raises(InputError):
        givePrompt("", "   ", "text")


def test_prompt_uses_title_template_when_content_is_empty():
    prompt = givePrompt("Solar Power", "", "text")

    assert 'Create a presentation about "Solar Power"' in prompt

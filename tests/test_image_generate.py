import pytest
import requests

from deckgen import image_generate
from deckgen.errors import UpstreamError


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


def _photo(photo_id, width, height):
    return {
        "id": photo_id,
        "width": width,
        "height": height,
        "url": f"https://www.pexels.com/photo/{photo_id}/",
        "photographer": f"Photographer {photo_id}",
        "photographer_url": f"https://www.pexels.com/@p{photo_id}",
        "src": {
            "large2x": f"https://images.pexels.com/{photo_id}/large2x.jpg",
            "small": f"https://images.pexels.com/{photo_id}/small.jpg",
        },
        "alt": "",
    }


@pytest.fixture
def pexels(monkeypatch):
    calls = []
    state = {"response": FakeResponse({"photos": []})}

    def fake_get(url, params=None, headers=None, timeout=None):
        calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        if isinstance(state["response"], Exception):
            raise state["response"]
        return state["response"]

    monkeypatch.setenv("PEXELS_API_KEY", "pexels-key")
    monkeypatch.setattr(image_generate.requests, "get", fake_get)
    state["calls"] = calls
    return state


def test_placeholder_theme_follows_first_character():
    # ord("a") == 97 -> 97 % 4 == 1 (green)
    assert image_generate.placeholder_theme_index("apple") == 1
    assert image_generate.placeholder_theme_index("Apple") == ord("A") % 4
    assert image_generate.placeholder_theme_index("") == 0


def test_placeholder_theme_uses_utf16_code_unit_for_emoji():
    # U+1F600 is the surrogate pair D83D DE00; 0xD83D % 4 == 1 (green)
    assert image_generate.placeholder_theme_index("\U0001F600 party") == 1
    assert image_generate.placeholder_theme_index("éclair") == 0xE9 % 4


def test_placeholder_image_shape():
    result = image_generate.placeholder_image("solar panels")

    assert result["source"] == "placeholder"
    assert result["searchTerm"] == "solar panels"
    assert result["imageUrl"].startswith("https://placehold.co/800x600/faf5ff/581c87?text=solar%20panels&t=")
    assert result["imageUrl"].endswith(str(result["timestamp"]))


def test_placeholder_colours_are_stable_for_a_term():
    first = image_generate.placeholder_image("teamwork")["imageUrl"].split("?")[0]
    second = image_generate.placeholder_image("teamwork")["imageUrl"].split("?")[0]

    assert first == second


def test_resolve_without_key_uses_placeholder():
    assert image_generate.resolve_image("  teamwork ")["source"] == "placeholder"


def test_search_pexels_requires_key():
    with pytest.raises(UpstreamError):
        image_generate.search_pexels("teamwork")


def test_resolve_prefers_largest_pexels_photo(pexels):
    pexels["response"] = FakeResponse({"photos": [
        _photo(1, 800, 600), _photo(2, 4000, 3000), _photo(3, 1920, 1080), _photo(4, 640, 480),
    ]})

    result = image_generate.resolve_image("mountains")

    assert result["source"] == "pexels"
    assert result["imageUrl"] == "https://images.pexels.com/2/large2x.jpg"
    assert result["thumbnails"] == [
        "https://images.pexels.com/2/small.jpg",
        "https://images.pexels.com/3/small.jpg",
        "https://images.pexels.com/1/small.jpg",
    ]
    assert result["alt"] == "mountains"
    assert result["attribution"] == {
        "photographer": "Photographer 2",
        "photographerUrl": "https://www.pexels.com/@p2",
        "source": "Pexels",
        "sourceUrl": "https://www.pexels.com/photo/2/",
    }

    call = pexels["calls"][0]
    assert call["params"] == {"query": "mountains", "per_page": 10, "orientation": "landscape"}
    assert call["headers"]["Authorization"] == "pexels-key"


@pytest.mark.parametrize("response", [
    FakeResponse({"photos": []}),
    FakeResponse({"error": "bad key"}, status_code=401),
    requests.ConnectionError("unreachable"),
])
def test_resolve_falls_back_to_placeholder(pexels, response):
    pexels["response"] = response

    assert image_generate.resolve_image("mountains")["source"] == "placeholder"

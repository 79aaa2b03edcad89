import pytest

from deckgen.app import app as flask_app


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    # A developer .env must not leak real credentials into the suite.
    for name in ("GEMINI_API_KEY", "GOOGLE_API_KEY", "PEXELS_API_KEY"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def client():
    flask_app.config["TESTING"] = True
    with flask_app.test_client() as test_client:
        yield test_client


class FakeModels:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    def generate_content(self, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error:
            raise self.error
        return type("Response", (), {"text": self.text})()


@pytest.fixture
def fake_gemini(monkeypatch):
    """Install a fake genai.Client; returns a setter for the canned response."""
    from deckgen import gemini_generate

    models = FakeModels()

    class FakeClient:
        def __init__(self, api_key=None, **kwargs):
            self.api_key = api_key
            self.models = models

    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.setattr(gemini_generate.genai, "Client", FakeClient)
    return models

class InputError(ValueError):
    """Missing or invalid user input; surfaced to the caller as a 400."""


class UpstreamError(RuntimeError):
    """Gemini or Pexels unreachable, misconfigured or returned something unusable."""


class ExtractionError(Exception):
    """PDF could not be parsed or carried no text; surfaced as a 422."""

    def __init__(self, message: str, details: str = ""):
        super().__init__(message)
        self.message = message
        self.details = details

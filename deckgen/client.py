"""HTTP client for the deck service, used by the CLI and by anything driving the viewer."""

from __future__ import annotations

import os
from typing import BinaryIO, Dict, List, Optional, Union

import requests

from .assembler import Slide, slides_from_payload
from .config import PDF_UPLOAD_TIMEOUT
from .errors import ExtractionError, InputError, UpstreamError

DEFAULT_TIMEOUT = 60


class DeckClient:
    def __init__(self, base_url: str = "http://localhost:5000", session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return f"Server error: {response.status_code}"
        if isinstance(data, dict):
            return data.get("error") or data.get("details") or f"Server error: {response.status_code}"
        return f"Server error: {response.status_code}"

    def _handle(self, response: requests.Response) -> Dict[str, object]:
        if response.status_code == 400:
            raise InputError(self._error_message(response))
        if response.status_code == 422:
            try:
                data = response.json()
            except ValueError:
                data = {}
            raise ExtractionError(data.get("error", "Unprocessable PDF"), data.get("details", ""))
        if not response.ok:
            raise UpstreamError(self._error_message(response))
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError("The server returned an invalid response format") from exc

    def _post(self, path: str, timeout: float = DEFAULT_TIMEOUT, **kwargs) -> Dict[str, object]:
        try:
            response = self.session.post(self._url(path), timeout=timeout, **kwargs)
        except requests.Timeout as exc:
            raise UpstreamError("Request timed out. The server took too long to respond.") from exc
        except requests.RequestException as exc:
            raise UpstreamError(f"Network error: {exc}") from exc
        return self._handle(response)

    def generate_slides(self, title: str = "", content: str = "", input_method: str = "text") -> List[Slide]:
        data = self._post(
            "/api/generate-slides",
            json={"title": title, "content": content, "inputMethod": input_method},
        )
        return slides_from_payload(data.get("slides"))

    def extract_pdf(self, pdf: Union[str, os.PathLike, BinaryIO], filename: str = "document.pdf") -> Dict[str, object]:
        if isinstance(pdf, (str, os.PathLike)):
            filename = os.path.basename(pdf)
            with open(pdf, "rb") as handle:
                payload = handle.read()
        else:
            payload = pdf.read()

        data = self._post(
            "/api/extract-pdf",
            timeout=PDF_UPLOAD_TIMEOUT,
            files={"pdf": (filename, payload, "application/pdf")},
        )
        if not data.get("text"):
            raise ExtractionError(
                data.get("error") or "No text was extracted from the PDF",
                "The file might be scanned or contain only images.",
            )
        return data

    def resolve_image(self, search_term: str) -> Dict[str, object]:
        return self._post("/api/image-service", json={"searchTerm": search_term})

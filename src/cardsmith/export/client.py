"""HTTP client for the external document rendering service."""

from __future__ import annotations

import logging
from threading import Lock
from typing import TYPE_CHECKING, Any

import requests

from ..core.cancellation import CancellationToken
from ..core.config import RenderServiceConfig
from ..core.diagnostics import DiagnosticEmitter, LoggingEmitter
from ..core.exceptions import RenderServiceError
from .assembler import PageDescription


if TYPE_CHECKING:  # pragma: no cover - typing only
    from requests import Response, Session


logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


class RenderServiceClient:
    """Submit document descriptions to ``POST <base>/render``."""

    _USER_AGENT = "cardsmith-render-client"

    def __init__(
        self,
        config: RenderServiceConfig,
        *,
        session: Session | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.config = config
        self.emitter = emitter or LoggingEmitter(logger_obj=logger)
        self._session = session
        self._session_lock = Lock()

    def render(
        self,
        description: PageDescription,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> bytes:
        """Return the rendered document bytes for ``description``."""
        url = self.config.render_endpoint()
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

        self.emitter.event("render_request", {"url": url, "pages": len(description.pages)})
        client = self._ensure_session()
        try:
            response = client.post(
                url,
                json=description.to_payload(),
                headers={"User-Agent": self._USER_AGENT, "Accept": "application/pdf"},
                timeout=self.config.timeout,
                stream=True,
            )
        except requests.RequestException as exc:
            raise RenderServiceError(f"Failed to reach rendering service at {url}: {exc}") from exc

        try:
            if not 200 <= response.status_code < 300:
                raise RenderServiceError(
                    _error_message(response), status_code=response.status_code
                )
            return self._read_body(response, cancel_token)
        finally:
            response.close()

    def _read_body(self, response: Response, cancel_token: CancellationToken | None) -> bytes:
        chunks: list[bytes] = []
        try:
            for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                if cancel_token is not None:
                    cancel_token.raise_if_cancelled()
                if chunk:
                    chunks.append(chunk)
        except requests.RequestException as exc:
            raise RenderServiceError(
                f"Connection to rendering service failed while downloading: {exc}",
                status_code=response.status_code,
            ) from exc
        return b"".join(chunks)

    def _ensure_session(self) -> Session:
        if self._session is not None:
            return self._session
        with self._session_lock:
            if self._session is None:
                self._session = requests.Session()
            return self._session


def _error_message(response: Response) -> str:
    message = f"Failed to generate PDF (status {response.status_code})"
    try:
        payload: Any = response.json()
    except ValueError:
        return message
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, str) and error.strip():
            return error.strip()
    return message


__all__ = ["RenderServiceClient"]

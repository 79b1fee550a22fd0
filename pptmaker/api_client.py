import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from .errors import (
    BackendError,
    DecodingError,
    InvalidEndpointError,
    NetworkError,
    ServerError,
    UnexpectedStatusError,
)
from .models import Outline, OutlineRequest, OutlineResponse, PresentationRequest, Slide

logger = logging.getLogger("pptmaker.api")

OUTLINE_PATH = "/generate-outline"
PRESENTATION_PATH = "/generate-presentation"


# =========================
# Helpers
# =========================
def _raise_for_backend_error(resp: httpx.Response) -> None:
    """Turn a non-200 response into ServerError (when it carries a detail string) or UnexpectedStatusError."""
    detail = None
    try:
        body = resp.json()
        if isinstance(body, dict) and isinstance(body.get("detail"), str):
            detail = body["detail"]
    except ValueError:
        pass
    if detail is not None:
        raise ServerError(resp.status_code, detail)
    raise UnexpectedStatusError(resp.status_code)


class BackendClient:
    """
    Talks to the outline/rendering backend.

    Every failure surfaces as a BackendError subclass; nothing is retried here.
    Pass `transport` to route requests somewhere other than the network (tests).
    """

    def __init__(self, base_url: str, timeout: float = 120.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    def _endpoint(self, path: str) -> str:
        url = (self.base_url or "").rstrip("/") + path
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL:
            raise InvalidEndpointError(url)
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise InvalidEndpointError(url)
        return url

    async def _post(self, path: str, payload: dict) -> httpx.Response:
        url = self._endpoint(path)
        logger.debug("POST %s body=%s", url, payload)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                r = await client.post(url, json=payload)
        except httpx.DecodingError as e:
            logger.error("response from %s did not match its encoding: %r", url, e)
            raise DecodingError(e) from e
        except httpx.RequestError as e:
            logger.error("request to %s failed: %r", url, e)
            raise NetworkError(e) from e
        logger.debug("%s -> HTTP %s (%d bytes)", url, r.status_code, len(r.content))
        if r.status_code != 200:
            _raise_for_backend_error(r)
        return r

    # =========================
    # Step 1: outline
    # =========================
    async def request_outline(self, topic: str, num_slides: int, tone: Optional[str] = None,
                              allowed_slide_types: Optional[List[str]] = None) -> Outline:
        body = OutlineRequest(
            topic=topic,
            num_slides=num_slides,
            tone=tone,
            allowed_slide_types=allowed_slide_types,
        ).model_dump(exclude_none=True)

        r = await self._post(OUTLINE_PATH, body)
        try:
            resp = OutlineResponse.model_validate_json(r.content)
        except ValidationError as e:
            logger.error("outline response did not decode: %s (body=%s)", e, r.text[:500])
            raise DecodingError(e) from e
        return resp.outline

    # =========================
    # Step 2: rendered file
    # =========================
    async def request_presentation_file(self, title: str, slides: List[Slide], template_id: str) -> bytes:
        body = PresentationRequest(
            presentation_title=title,
            slides=slides,
            template=template_id,
        ).model_dump(mode="json")

        r = await self._post(PRESENTATION_PATH, body)
        return r.content


__all__ = ["BackendClient", "BackendError"]

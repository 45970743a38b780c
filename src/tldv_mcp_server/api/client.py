"""Async client for the tl;dv public API.

Handles authentication, request formatting, envelope normalisation and
retry of transient failures. Every public operation resolves to a
`TldvResponse` envelope; no exception escapes after construction.

Usage example:
    api = TldvApi({"api_key": "your-api-key"})
    meeting = await api.get_meeting("meeting-123")
    if meeting.get("error"):
        ...
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Mapping, Optional, Type, Union
from urllib.parse import quote, urlencode

import httpx
import structlog
from pydantic import BaseModel
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from ..errors import ApiError
from ..schemas import (
    GetHighlightsResponse,
    GetMeetingsParams,
    GetMeetingsResponse,
    GetTranscriptResponse,
    HealthResponse,
    Meeting,
    TldvConfig,
    TldvResponse,
)
from ..validation import Invalid, validate

logger = structlog.get_logger(__name__)

UNKNOWN_ERROR = "Unknown error occurred"
REQUEST_FAILED = "API request failed"

Sleep = Callable[[float], Awaitable[Any]]


def _decode(response: httpx.Response) -> Any:
    """Return the JSON body, or the raw text when it is not JSON."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _is_transient(error: Exception) -> bool:
    if isinstance(error, ApiError):
        return error.retryable
    return isinstance(error, httpx.TransportError)


def _error(message: Optional[str]) -> TldvResponse:
    return {"data": None, "error": message or UNKNOWN_ERROR}


class TldvApi:
    """tl;dv API client.

    Args:
        config: A `TldvConfig` or a mapping of its fields. An empty or
            missing `api_key` raises `ConfigurationError` immediately.
        transport: Optional httpx transport (tests pass a MockTransport).
        sleep: Coroutine used to wait between retries.

    Raises:
        ConfigurationError: If the configuration is invalid.
    """

    def __init__(
        self,
        config: Union[TldvConfig, Mapping[str, Any], None],
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        if not isinstance(config, TldvConfig):
            config = TldvConfig.create(**dict(config or {}))
        self._config = config
        self._base_url = config.base_url.rstrip("/")
        self._headers = {
            "x-api-key": config.api_key,
            "Content-Type": "application/json",
        }
        self._transport = transport
        self._sleep = sleep

    @property
    def config(self) -> TldvConfig:
        return self._config

    def _retrying(self, endpoint: str) -> AsyncRetrying:
        """Retry policy: transient failures only, capped exponential backoff."""

        def _log_retry(state: RetryCallState) -> None:
            logger.warning(
                "Retrying tl;dv request",
                endpoint=endpoint,
                attempt=state.attempt_number,
                delay_ms=round(state.next_action.sleep * 1000),
                error=str(state.outcome.exception()),
            )

        return AsyncRetrying(
            stop=stop_after_attempt(self._config.max_retries + 1),
            wait=wait_exponential(
                multiplier=self._config.retry_delay_ms / 1000,
                max=self._config.max_retry_delay_ms / 1000,
            ),
            retry=retry_if_exception(_is_transient),
            sleep=self._sleep,
            before_sleep=_log_retry,
            reraise=True,
        )

    async def _send(self, endpoint: str) -> TldvResponse:
        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.get(
                f"{self._base_url}{endpoint}", headers=self._headers
            )
        body = _decode(response)
        if response.status_code > 200:
            message = body.get("message") if isinstance(body, dict) else None
            raise ApiError(
                str(message) if message else REQUEST_FAILED, response.status_code
            )
        if isinstance(body, dict) and "data" in body:
            return body
        return {"data": body}

    async def _request(
        self,
        endpoint: str,
        *,
        model: Optional[Type[BaseModel]] = None,
        whole_body: bool = False,
    ) -> TldvResponse:
        """Run one operation, retrying transient failures.

        Args:
            endpoint: Path (and query) appended to the base URL.
            model: Response model checked when `validate_responses` is on.
            whole_body: Check the whole envelope rather than its `data`.
        """

        retrying = self._retrying(endpoint)
        try:
            envelope = await retrying(self._send, endpoint)
        except Exception as exc:
            logger.error(
                "tl;dv request failed",
                endpoint=endpoint,
                attempts=retrying.statistics.get("attempt_number"),
                status_code=getattr(exc, "status_code", None),
                error=str(exc),
            )
            return _error(str(exc))
        return self._check(envelope, model, whole_body)

    def _check(
        self,
        envelope: TldvResponse,
        model: Optional[Type[BaseModel]],
        whole_body: bool,
    ) -> TldvResponse:
        if not self._config.validate_responses or model is None:
            return envelope
        target = envelope if whole_body else envelope.get("data")
        result = validate(model, target)
        if isinstance(result, Invalid):
            logger.error("Invalid tl;dv response", model=model.__name__)
            return _error(
                "Invalid response: " + "; ".join(str(v) for v in result.violations)
            )
        return envelope

    async def get_meeting(self, meeting_id: str) -> TldvResponse:
        """Retrieve a meeting's metadata by its ID."""
        return await self._request(
            f"/meetings/{quote(meeting_id, safe='')}", model=Meeting
        )

    async def get_meetings(
        self, params: Union[GetMeetingsParams, Mapping[str, Any], None] = None
    ) -> TldvResponse:
        """List meetings with optional filtering and pagination.

        Params are validated before any request is made; an invalid value
        yields an error envelope and is never retried.

        Example:
            await api.get_meetings({"query": "team sync", "page": 1, "limit": 10})
        """

        result = validate(GetMeetingsParams, params)
        if isinstance(result, Invalid):
            logger.error("Invalid meeting list parameters", error=result.message)
            return _error(result.message)
        query = urlencode(result.value.query_items())
        return await self._request(f"/meetings?{query}", model=GetMeetingsResponse)

    async def get_transcript(self, meeting_id: str) -> TldvResponse:
        """Retrieve the time-stamped transcript of a meeting."""
        return await self._request(
            f"/meetings/{quote(meeting_id, safe='')}/transcript",
            model=GetTranscriptResponse,
            whole_body=True,
        )

    async def get_highlights(self, meeting_id: str) -> TldvResponse:
        """Retrieve the highlights of a meeting."""
        return await self._request(
            f"/meetings/{quote(meeting_id, safe='')}/highlights",
            model=GetHighlightsResponse,
            whole_body=True,
        )

    async def health_check(self) -> TldvResponse:
        """Check the health status of the API."""
        return await self._request("/health", model=HealthResponse)

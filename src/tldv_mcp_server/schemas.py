"""Pydantic schemas for the tl;dv API and the MCP tool inputs.

These models define the JSON contracts exchanged with the tl;dv public
API and the input shapes advertised by the MCP tools. Wire names are
camelCase and exposed through aliases; attributes are snake_case.
All models are immutable.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Tuple, TypedDict

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    HttpUrl,
    ValidationError,
    field_validator,
)

from .errors import ConfigurationError
from .utils import is_iso8601_datetime

DEFAULT_BASE_URL = "https://pasta.tldv.io/v1alpha1"


class _Model(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


def _check_datetime(value: Optional[str]) -> Optional[str]:
    if value is not None and not is_iso8601_datetime(value):
        raise ValueError("must be an ISO 8601 date-time")
    return value


# Configuration


class TldvConfig(_Model):
    """Configuration for the tl;dv API client.

    Attributes:
        api_key: Credential sent as the `x-api-key` header. Required.
        base_url: API root; every endpoint is appended to it.
        max_retries: Retry ceiling for transient failures.
        retry_delay_ms: First backoff delay.
        max_retry_delay_ms: Cap applied to the exponential backoff.
        validate_responses: Check successful payloads against the
            response models before returning them.
    """

    api_key: str = Field(min_length=1)
    base_url: str = DEFAULT_BASE_URL
    max_retries: int = Field(default=3, ge=0)
    retry_delay_ms: int = Field(default=1_000, ge=0)
    max_retry_delay_ms: int = Field(default=2_000, ge=0)
    validate_responses: bool = False

    @classmethod
    def create(cls, **values: Any) -> "TldvConfig":
        """Validate `values`, raising ConfigurationError when they are unusable."""
        try:
            return cls(**values)
        except ValidationError as exc:
            fields = sorted({".".join(str(p) for p in e["loc"]) for e in exc.errors()})
            if "api_key" in fields:
                message = "API key is required"
            else:
                message = f"Invalid client configuration: {', '.join(fields)}"
            raise ConfigurationError(message, {"fields": fields}) from exc


# Envelope


class TldvResponse(TypedDict, total=False):
    """Result of every client operation.

    Success carries `data` (and whatever else the API put next to it);
    failure carries `data: None` and an `error` text.
    """

    data: Any
    error: Optional[str]


# Domain records


class User(_Model):
    name: str
    email: EmailStr


class Template(_Model):
    id: str
    label: str


class Meeting(_Model):
    """Meeting metadata as returned by `GET /meetings/{id}`."""

    id: str
    name: str
    happened_at: str = Field(alias="happenedAt")
    url: HttpUrl
    organizer: User
    invitees: List[User] = Field(default_factory=list)
    template: Template

    @field_validator("happened_at")
    @classmethod
    def _happened_at_is_datetime(cls, v):
        return _check_datetime(v)


class Sentence(_Model):
    """One transcript unit. `start_time <= end_time` is not enforced."""

    speaker: str
    text: str
    start_time: int = Field(alias="startTime", ge=0)
    end_time: int = Field(alias="endTime", ge=0)


class HighlightTopic(_Model):
    title: str
    summary: str


class Highlight(_Model):
    text: str
    start_time: int = Field(alias="startTime", ge=0)
    source: Literal["manual", "auto"]
    topic: HighlightTopic


class GetTranscriptResponse(_Model):
    id: str
    meeting_id: str = Field(alias="meetingId")
    data: List[Sentence]


class GetHighlightsResponse(_Model):
    meeting_id: str = Field(alias="meetingId")
    data: List[Highlight]


class GetMeetingsResponse(_Model):
    """One page of meetings."""

    page: int = Field(ge=0)
    pages: int = Field(gt=0)
    total: int = Field(ge=0)
    page_size: int = Field(alias="pageSize", gt=0)
    results: List[Meeting]


class HealthResponse(_Model):
    status: str


# Inputs


class GetMeetingsParams(_Model):
    """Filters and pagination for `GET /meetings`.

    `meeting_type` is decided by the API: a meeting is external when the
    organizer's email domain differs from at least one invitee's domain.
    """

    query: Optional[str] = Field(default=None, description="Search query")
    page: Optional[int] = Field(
        default=None, gt=0, strict=True, description="Page number"
    )
    limit: int = Field(
        default=50, gt=0, strict=True, description="Number of results per page"
    )
    from_: Optional[str] = Field(
        default=None, alias="from", description="ISO 8601 lower bound"
    )
    to: Optional[str] = Field(default=None, description="ISO 8601 upper bound")
    only_participated: Optional[bool] = Field(
        default=None,
        alias="onlyParticipated",
        strict=True,
        description="Only meetings the user participated in",
    )
    meeting_type: Optional[Literal["internal", "external"]] = Field(
        default=None, alias="meetingType", description="internal or external"
    )

    @field_validator("from_", "to")
    @classmethod
    def _bounds_are_datetimes(cls, v):
        return _check_datetime(v)

    def query_items(self) -> List[Tuple[str, str]]:
        """Return the query parameters in wire order, skipping unset fields."""
        items: List[Tuple[str, str]] = []
        if self.query:
            items.append(("query", self.query))
        if self.page is not None:
            items.append(("page", str(self.page)))
        items.append(("limit", str(self.limit)))
        if self.from_:
            items.append(("from", self.from_))
        if self.to:
            items.append(("to", self.to))
        if self.only_participated is not None:
            items.append(("onlyParticipated", "true" if self.only_participated else "false"))
        if self.meeting_type:
            items.append(("meetingType", self.meeting_type))
        return items


class GetMeetingInput(_Model):
    id: str = Field(description="Meeting identifier")


class GetTranscriptInput(_Model):
    meeting_id: str = Field(alias="meetingId", description="Meeting identifier")


class GetHighlightsInput(_Model):
    meeting_id: str = Field(alias="meetingId", description="Meeting identifier")

"""
Pydantic models for the Contribution Scores backend.

This module provides type-safe data validation and serialization for:
- Revision events read from the wiki database (input)
- Per-author aggregates produced by the revision scanner (output)
- Report requests and presentation options (per-invocation configuration)
- Ranked rows and report responses handed to the formatter / API clients

All models use Pydantic v2 syntax with field validation and examples.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Input Models (revision store)
# =============================================================================


class RevisionEvent(BaseModel):
    """
    One recorded edit of one page.

    `parent_length` is the byte size of the page's preceding revision, or None
    when this revision created the page (or its parent row is missing).
    """
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "revision_id": 1042,
                "author_id": 7,
                "author_name": "ExampleUser",
                "author_real_name": "Example User",
                "page_id": 311,
                "namespace": 0,
                "timestamp": "2026-01-15T10:30:00Z",
                "length": 5120,
                "parent_length": 4980,
            }
        }
    )

    revision_id: Optional[int] = Field(
        default=None,
        description="Revision primary key, used only to order edits sharing a timestamp"
    )
    author_id: Optional[int] = Field(
        default=None,
        description="Registered user id; None or 0 for anonymous edits"
    )
    author_name: str = Field(
        ...,
        description="User name recorded on the revision"
    )
    author_real_name: Optional[str] = Field(
        default=None,
        description="Real name from the user table, if the user set one"
    )
    page_id: int = Field(
        ...,
        description="Identity of the edited page"
    )
    namespace: int = Field(
        ...,
        description="Namespace number of the edited page"
    )
    timestamp: datetime = Field(
        ...,
        description="When the revision was saved; naive values are taken as UTC"
    )
    length: int = Field(
        ...,
        ge=0,
        description="Byte size of the page content after this edit"
    )
    parent_length: Optional[int] = Field(
        default=None,
        ge=0,
        description="Byte size of the preceding revision of the same page"
    )

    @field_validator("timestamp")
    @classmethod
    def timestamp_as_utc(cls, value: datetime) -> datetime:
        # timestamp without time zone columns hold UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


# =============================================================================
# Output Models (aggregation and ranking)
# =============================================================================


class AuthorAggregate(BaseModel):
    """
    Editing statistics for one author over the report window.

    Invariants: pos_diff >= 0, neg_diff <= 0, size_diff == pos_diff + neg_diff,
    page_count <= edit_count. `score` stays 0.0 until the score combiner runs.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "author_id": 7,
                "author_name": "ExampleUser",
                "author_real_name": None,
                "display_name": "ExampleUser",
                "page_count": 2,
                "edit_count": 3,
                "size_diff": 90,
                "pos_diff": 120,
                "neg_diff": -30,
                "score": 4.0,
            }
        }
    )

    author_id: int = Field(..., description="Registered user id")
    author_name: str = Field(..., description="Current user name of the author")
    author_real_name: Optional[str] = Field(
        default=None,
        description="Real name, when known"
    )
    display_name: str = Field(
        ...,
        description="Name to show: real name if requested and present, else user name"
    )
    page_count: int = Field(..., ge=0, description="Distinct pages touched")
    edit_count: int = Field(..., ge=0, description="Qualifying edits made")
    size_diff: int = Field(..., description="Net bytes added across all edits")
    pos_diff: int = Field(..., ge=0, description="Sum of positive per-edit deltas")
    neg_diff: int = Field(..., le=0, description="Sum of negative per-edit deltas")
    score: float = Field(
        default=0.0,
        description="Composite ranking value, unrounded"
    )


class RankedAuthor(AuthorAggregate):
    """
    An AuthorAggregate with its 1-based position in the final ordering.

    Built only at presentation time; rank is never stored on the aggregate.
    """
    rank: int = Field(..., ge=1, description="1-based position in the report")


# =============================================================================
# Request / Options Models
# =============================================================================


class ReportRequest(BaseModel):
    """
    Parameters of one report invocation.

    Every toggle travels with the request; nothing is read from process state
    during a report.
    """
    model_config = ConfigDict(frozen=True)

    window_days: int = Field(
        default=7,
        description="Trailing window in days; 0 or less means all history"
    )
    limit: int = Field(
        default=10,
        description="Maximum rows; 0 or less means no limit"
    )
    exclude_bots: bool = Field(
        default=False,
        description="Drop every edit by members of the bot group"
    )
    exclude_blocked: bool = Field(
        default=False,
        description="Drop every edit by currently blocked users"
    )
    include_user_namespace: bool = Field(
        default=False,
        description="Count edits to personal user pages (namespace 2)"
    )
    use_real_name: bool = Field(
        default=False,
        description="Prefer the real name as display_name when one is set"
    )


class ReportOptions(BaseModel):
    """
    Presentation hints parsed from the include parameter's option flags.
    """
    model_config = ConfigDict(frozen=True)

    sortable: bool = Field(default=True, description="False when 'nosort' was given")
    show_tools: bool = Field(default=True, description="False when 'notools' was given")
    show_title: bool = Field(default=True, description="False when 'notitle' was given")


# =============================================================================
# Response Models
# =============================================================================


class ReportResponse(BaseModel):
    """
    One computed report as returned by the API.
    """
    window_days: int = Field(..., description="Window the report covers; 0 = all history")
    limit: int = Field(..., description="Row limit applied; 0 or less = none")
    generated_at: datetime = Field(..., description="Reference time used for the window")
    options: ReportOptions = Field(
        default_factory=ReportOptions,
        description="Presentation hints for the formatter"
    )
    rows: List[RankedAuthor] = Field(
        default_factory=list,
        description="Authors in final order"
    )

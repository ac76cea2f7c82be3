"""
Report orchestration service: the engine's public entry point.

Data flow for one report:
1. Compute the window cutoff from window_days and the reference time
2. Read one snapshot from the revision store (events, plus blocked users and
   bots only when the request excludes them)
3. Scan the events into per-author aggregates (revision_scanner)
4. Build the candidate union, score, order and truncate (score_combiner)

Every call is independent and side-effect free: no caching, no persistence.
Store failures propagate to the caller unchanged.

Key Functions:
- compute_report: The exposed operation, one ordered list of AuthorAggregate
- run_report: Same, from a prepared ReportRequest
- compute_configured_reports: Run every (window_days, limit) preset
- to_ranked_rows / build_report_response: Presentation hand-off with ranks
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from contribution_scores.core.config import Settings
from contribution_scores.models.schemas import (
    AuthorAggregate,
    RankedAuthor,
    ReportOptions,
    ReportRequest,
    ReportResponse,
)
from contribution_scores.services.revision_scanner import scan_revisions, window_cutoff
from contribution_scores.services.revision_store import RevisionStore
from contribution_scores.services.score_combiner import combine_scores


logger = logging.getLogger(__name__)


# =============================================================================
# Report Computation
# =============================================================================


async def run_report(
    store: RevisionStore,
    request: ReportRequest,
    now: Optional[datetime] = None,
) -> List[AuthorAggregate]:
    """
    Compute one report from a prepared request.

    Args:
        store: Source of the revision / user-status snapshot.
        request: Report parameters.
        now: Reference time for the window (default: current UTC time).

    Returns:
        List[AuthorAggregate]: Scored authors, best first; empty when no
            author has a qualifying edit.

    Raises:
        Exception: Whatever the store raises (e.g. asyncpg.PostgresError).
    """
    if now is None:
        now = datetime.now(timezone.utc)

    snapshot = await store.read_snapshot(
        since=window_cutoff(request.window_days, now),
        include_user_namespace=request.include_user_namespace,
        with_blocked=request.exclude_blocked,
        with_bots=request.exclude_bots,
    )

    aggregates = scan_revisions(
        snapshot.events,
        request,
        now=now,
        blocked_author_ids=snapshot.blocked_author_ids,
        bot_author_ids=snapshot.bot_author_ids,
    )
    report = combine_scores(aggregates, request.limit)

    logger.info(
        f"Computed contribution report: window_days={request.window_days}, "
        f"limit={request.limit}, authors={len(aggregates)}, rows={len(report)}"
    )

    return report


async def compute_report(
    store: RevisionStore,
    window_days: int,
    limit: int,
    exclude_bots: bool,
    exclude_blocked: bool,
    include_user_namespace: bool,
    use_real_name: bool = False,
    now: Optional[datetime] = None,
) -> List[AuthorAggregate]:
    """
    Compute the ordered contribution leaderboard.

    Args:
        store: Source of the revision / user-status snapshot.
        window_days: Trailing window in days; 0 or less = all history.
        limit: Maximum rows; 0 or less = no limit.
        exclude_bots: Drop every edit by bot group members.
        exclude_blocked: Drop every edit by currently blocked users.
        include_user_namespace: Count edits to user pages (namespace 2).
        use_real_name: Prefer real names for display_name.
        now: Reference time for the window (default: current UTC time).

    Returns:
        List[AuthorAggregate]: Scored authors, best first.

    Example:
        >>> rows = await compute_report(store, 7, 10, True, True, False)
        >>> rows[0].score >= rows[-1].score
        True
    """
    request = ReportRequest(
        window_days=window_days,
        limit=limit,
        exclude_bots=exclude_bots,
        exclude_blocked=exclude_blocked,
        include_user_namespace=include_user_namespace,
        use_real_name=use_real_name,
    )
    return await run_report(store, request, now=now)


# =============================================================================
# Preset Reports
# =============================================================================


def preset_requests(settings: Settings) -> List[ReportRequest]:
    """
    Expand settings.report_presets into ReportRequests.

    Windowed presets include user pages, the all-history preset does not.

    Raises:
        ValueError: If no presets are configured.
    """
    if not settings.report_presets:
        raise ValueError("No contribution report presets are configured")

    return [
        ReportRequest(
            window_days=window_days,
            limit=limit,
            exclude_bots=settings.ignore_bots,
            exclude_blocked=settings.ignore_blocked_users,
            include_user_namespace=window_days > 0,
            use_real_name=settings.use_real_name,
        )
        for window_days, limit in settings.report_presets
    ]


async def compute_configured_reports(
    store: RevisionStore,
    settings: Settings,
    now: Optional[datetime] = None,
) -> List[Tuple[ReportRequest, List[AuthorAggregate]]]:
    """
    Run every configured preset against the same reference time.

    Args:
        store: Source of the revision / user-status snapshot.
        settings: Supplies report_presets and exclusion defaults.
        now: Reference time shared by all presets (default: current UTC time).

    Returns:
        List of (request, ordered aggregates) pairs, in preset order.

    Raises:
        ValueError: If no presets are configured.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    reports = []
    for request in preset_requests(settings):
        reports.append((request, await run_report(store, request, now=now)))

    return reports


# =============================================================================
# Presentation Hand-off
# =============================================================================


def to_ranked_rows(aggregates: List[AuthorAggregate]) -> List[RankedAuthor]:
    """Attach 1-based positional ranks to an ordered report."""
    return [
        RankedAuthor(rank=position, **aggregate.model_dump())
        for position, aggregate in enumerate(aggregates, start=1)
    ]


def build_report_response(
    request: ReportRequest,
    aggregates: List[AuthorAggregate],
    generated_at: datetime,
    options: Optional[ReportOptions] = None,
) -> ReportResponse:
    """
    Package an ordered report for the API / external formatter.

    Args:
        request: The request the report was computed for.
        aggregates: Ordered aggregates from run_report().
        generated_at: Reference time used for the window.
        options: Presentation hints (default: all enabled).

    Returns:
        ReportResponse: Response model with ranked rows.
    """
    return ReportResponse(
        window_days=request.window_days,
        limit=request.limit,
        generated_at=generated_at,
        options=options or ReportOptions(),
        rows=to_ranked_rows(aggregates),
    )

"""
Revision scanning service: turns revision events into per-author aggregates.

This is the first half of the ranking engine. Given a ReportRequest, the
events read from the revision store and the user-status sets, it filters the
events down to qualifying edits and aggregates them per author.

Qualifying edit (all must hold):
- Window: when window_days > 0, timestamp > now - window_days * 86400 seconds
- Namespace: namespace % 2 == 0, not 3002, and not 2 unless user pages
  are included
- Author: registered (id not None/0), not excluded as blocked or bot

Per-author aggregates:
- page_count: distinct page_id values
- edit_count: qualifying edits
- size_diff: sum of delta = length - (parent_length or 0)
- pos_diff: sum of positive deltas only
- neg_diff: sum of negative deltas only (zero deltas feed neither)

The output is unscored and unordered; see score_combiner for ranking.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import AbstractSet, Iterable, List, Optional

import pandas as pd

from contribution_scores.models.schemas import (
    AuthorAggregate,
    ReportRequest,
    RevisionEvent,
)
from contribution_scores.sql.revision_queries import get_excluded_namespaces


logger = logging.getLogger(__name__)


SECONDS_PER_DAY: int = 60 * 60 * 24

# Columns of the working frame, in construction order
EVENT_COLUMNS: List[str] = [
    'author_id',
    'author_name',
    'author_real_name',
    'page_id',
    'delta',
]


# =============================================================================
# Filters
# =============================================================================


def window_cutoff(window_days: int, now: datetime) -> Optional[datetime]:
    """
    Return the exclusive lower bound for a trailing window.

    Args:
        window_days: Window length in days; 0 or less means all history.
        now: Reference time.

    Returns:
        Optional[datetime]: now - window_days days, or None when unbounded.

    Example:
        >>> window_cutoff(7, datetime(2026, 1, 15, tzinfo=timezone.utc))
        datetime.datetime(2026, 1, 8, 0, 0, tzinfo=datetime.timezone.utc)
        >>> window_cutoff(0, datetime(2026, 1, 15, tzinfo=timezone.utc)) is None
        True
    """
    if window_days <= 0:
        return None
    return now - timedelta(seconds=window_days * SECONDS_PER_DAY)


def is_content_namespace(namespace: int, include_user_namespace: bool = False) -> bool:
    """
    Check whether edits in a namespace count toward the report.

    Talk namespaces mirror a content namespace at +1 and are therefore odd.

    Args:
        namespace: Namespace number of the edited page.
        include_user_namespace: Whether namespace 2 (user pages) counts.

    Returns:
        True if the namespace qualifies.
    """
    if namespace % 2 != 0:
        return False
    return namespace not in get_excluded_namespaces(include_user_namespace)


def revision_delta(length: int, parent_length: Optional[int]) -> int:
    """
    Byte change made by one revision.

    A missing parent (page creation, or broken history) counts as 0, so a new
    page contributes its whole length.
    """
    return length - (parent_length or 0)


def select_qualifying_events(
    events: Iterable[RevisionEvent],
    request: ReportRequest,
    now: datetime,
    excluded_author_ids: AbstractSet[int] = frozenset(),
) -> List[RevisionEvent]:
    """
    Keep only the events that count toward a report.

    Args:
        events: Events from the revision store, in any order.
        request: Report parameters (window and namespace settings).
        now: Reference time for the window.
        excluded_author_ids: Authors whose edits are dropped entirely.

    Returns:
        List[RevisionEvent]: Qualifying events, oldest first (ties by revision id).
    """
    cutoff = window_cutoff(request.window_days, now)

    qualifying = [
        event for event in events
        if event.author_id
        and event.author_id not in excluded_author_ids
        and is_content_namespace(event.namespace, request.include_user_namespace)
        and (cutoff is None or event.timestamp > cutoff)
    ]
    qualifying.sort(key=lambda e: (e.timestamp, e.revision_id or 0))

    return qualifying


# =============================================================================
# Aggregation
# =============================================================================


def _display_name(author_name: str, real_name: Optional[str], use_real_name: bool) -> str:
    if use_real_name and real_name:
        return real_name
    return author_name


def aggregate_events(
    events: List[RevisionEvent],
    use_real_name: bool = False,
) -> List[AuthorAggregate]:
    """
    Aggregate already-qualified events per author.

    The author's name is taken from their most recent event, so renamed
    users appear under their current name. Events must be oldest first.

    Args:
        events: Qualifying events, oldest first.
        use_real_name: Prefer the real name as display_name.

    Returns:
        List[AuthorAggregate]: One unscored aggregate per author, by author_id.

    Example:
        >>> aggregates = aggregate_events(events)
        >>> aggregates[0].size_diff == aggregates[0].pos_diff + aggregates[0].neg_diff
        True
    """
    if not events:
        return []

    frame = pd.DataFrame(
        [
            (
                event.author_id,
                event.author_name,
                event.author_real_name,
                event.page_id,
                revision_delta(event.length, event.parent_length),
            )
            for event in events
        ],
        columns=EVENT_COLUMNS,
    )
    frame['pos'] = frame['delta'].clip(lower=0)
    frame['neg'] = frame['delta'].clip(upper=0)

    grouped = frame.groupby('author_id', sort=True).agg(
        author_name=('author_name', 'last'),
        author_real_name=('author_real_name', 'last'),
        page_count=('page_id', 'nunique'),
        edit_count=('page_id', 'count'),
        size_diff=('delta', 'sum'),
        pos_diff=('pos', 'sum'),
        neg_diff=('neg', 'sum'),
    ).reset_index()

    aggregates = []
    for row in grouped.itertuples(index=False):
        # 'last' yields NaN for authors without any real name
        real_name = row.author_real_name if isinstance(row.author_real_name, str) else None
        aggregates.append(AuthorAggregate(
            author_id=int(row.author_id),
            author_name=str(row.author_name),
            author_real_name=real_name or None,
            display_name=_display_name(str(row.author_name), real_name, use_real_name),
            page_count=int(row.page_count),
            edit_count=int(row.edit_count),
            size_diff=int(row.size_diff),
            pos_diff=int(row.pos_diff),
            neg_diff=int(row.neg_diff),
        ))

    return aggregates


# =============================================================================
# Entry Point
# =============================================================================


def scan_revisions(
    events: Iterable[RevisionEvent],
    request: ReportRequest,
    now: Optional[datetime] = None,
    blocked_author_ids: AbstractSet[int] = frozenset(),
    bot_author_ids: AbstractSet[int] = frozenset(),
) -> List[AuthorAggregate]:
    """
    Produce unscored per-author aggregates for one report request.

    Blocked and bot exclusions are preconditions on which authors are
    counted at all; they only apply when the request enables them, and they
    reflect current status rather than status at edit time.

    Args:
        events: Revision events from the store.
        request: Report parameters.
        now: Reference time for the window (default: current UTC time).
        blocked_author_ids: Users currently holding a block.
        bot_author_ids: Current members of the bot group.

    Returns:
        List[AuthorAggregate]: One aggregate per author with at least one
            qualifying edit; empty when nothing qualifies.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    excluded = set()
    if request.exclude_blocked:
        excluded.update(blocked_author_ids)
    if request.exclude_bots:
        excluded.update(bot_author_ids)

    qualifying = select_qualifying_events(events, request, now, excluded)
    aggregates = aggregate_events(qualifying, use_real_name=request.use_real_name)

    logger.debug(
        f"Scanned {len(qualifying)} qualifying revisions into "
        f"{len(aggregates)} author aggregates (window_days={request.window_days})"
    )

    return aggregates

"""
Read-only access to the wiki revision store and user-status store.

The engine consumes two external collaborators:
- the revision store, queryable by time range and namespace, yielding
  RevisionEvent records that already carry their parent revision's length;
- the user-status store, answering "who is currently blocked" and
  "who is currently in the bot group".

PostgresRevisionStore reads all three inside one read-only REPEATABLE READ
transaction so a report never mixes two states of the database. Failures
(asyncpg.PostgresError, OSError, pool timeouts) propagate to the caller
untouched: a partially read leaderboard would be misleading.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, FrozenSet, List, Mapping, Optional, Protocol

from asyncpg import Connection, Pool

from contribution_scores.models.schemas import RevisionEvent
from contribution_scores.sql.revision_queries import (
    get_blocked_users_query,
    get_bot_users_query,
    get_revision_events_query,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Snapshot Container
# =============================================================================


@dataclass
class RevisionSnapshot:
    """
    Everything one report reads from the stores.

    Attributes:
        events: Revision events, oldest first.
        blocked_author_ids: Users holding an active block (empty if not read).
        bot_author_ids: Members of the bot group (empty if not read).
    """
    events: List[RevisionEvent] = field(default_factory=list)
    blocked_author_ids: FrozenSet[int] = frozenset()
    bot_author_ids: FrozenSet[int] = frozenset()


class RevisionStore(Protocol):
    """Anything that can hand the report service a consistent snapshot."""

    async def read_snapshot(
        self,
        since: Optional[datetime],
        include_user_namespace: bool,
        with_blocked: bool,
        with_bots: bool,
    ) -> RevisionSnapshot:
        ...


# =============================================================================
# Row Mapping
# =============================================================================


def row_to_revision_event(row: Mapping[str, Any]) -> RevisionEvent:
    """
    Convert a row from get_revision_events_query() into a RevisionEvent.

    Args:
        row: asyncpg Record (or any mapping) with the query's column names.

    Returns:
        RevisionEvent: The mapped event. A NULL parent_length stays None and a
            naive edit_timestamp is read as UTC.
    """
    parent_length = row['parent_length']
    return RevisionEvent(
        revision_id=row['revision_id'],
        author_id=row['author_id'],
        author_name=row['author_name'],
        author_real_name=row['author_real_name'] or None,
        page_id=row['page_id'],
        namespace=row['namespace'],
        timestamp=row['edit_timestamp'],
        length=int(row['length'] or 0),
        parent_length=int(parent_length) if parent_length is not None else None,
    )


# =============================================================================
# Query Functions
# =============================================================================


async def fetch_revision_events(
    conn: Connection,
    since: Optional[datetime],
    include_user_namespace: bool = False,
) -> List[RevisionEvent]:
    """
    Fetch revision events newer than `since` (or all history when None).

    Args:
        conn: Open asyncpg connection.
        since: Exclusive lower bound on the revision timestamp.
        include_user_namespace: Whether user pages are read at all.

    Returns:
        List[RevisionEvent]: Events ordered by timestamp, then revision id.

    Raises:
        asyncpg.PostgresError: If the query fails.
    """
    query = get_revision_events_query(
        with_window=since is not None,
        include_user_namespace=include_user_namespace,
    )
    if since is not None:
        rows = await conn.fetch(query, since)
    else:
        rows = await conn.fetch(query)

    return [row_to_revision_event(row) for row in rows]


async def fetch_author_ids(conn: Connection, query: str) -> FrozenSet[int]:
    """
    Run a user-status query and collect its user_id column.

    Args:
        conn: Open asyncpg connection.
        query: get_blocked_users_query() or get_bot_users_query().

    Returns:
        FrozenSet[int]: The user ids returned.
    """
    rows = await conn.fetch(query)
    return frozenset(int(row['user_id']) for row in rows)


# =============================================================================
# PostgreSQL Store
# =============================================================================


class PostgresRevisionStore:
    """
    Revision and user-status store backed by the wiki's PostgreSQL database.

    Example:
        pool = await get_db_pool()
        store = PostgresRevisionStore(pool)
        snapshot = await store.read_snapshot(cutoff, False, True, True)
    """

    def __init__(self, pool: Pool):
        self._pool = pool

    async def read_snapshot(
        self,
        since: Optional[datetime],
        include_user_namespace: bool,
        with_blocked: bool,
        with_bots: bool,
    ) -> RevisionSnapshot:
        """
        Read events and, when asked, user status in one consistent snapshot.

        Args:
            since: Exclusive lower bound on revision timestamps, or None.
            include_user_namespace: Whether user-page edits are read.
            with_blocked: Read the set of currently blocked users.
            with_bots: Read the set of bot group members.

        Returns:
            RevisionSnapshot: The data for one report.

        Raises:
            asyncpg.PostgresError: If any query fails.
        """
        async with self._pool.acquire() as conn:
            async with conn.transaction(isolation='repeatable_read', readonly=True):
                events = await fetch_revision_events(conn, since, include_user_namespace)

                blocked: FrozenSet[int] = frozenset()
                if with_blocked:
                    blocked = await fetch_author_ids(conn, get_blocked_users_query())

                bots: FrozenSet[int] = frozenset()
                if with_bots:
                    bots = await fetch_author_ids(conn, get_bot_users_query())

        logger.debug(
            f"Read snapshot: {len(events)} revisions, "
            f"{len(blocked)} blocked users, {len(bots)} bots"
        )

        return RevisionSnapshot(
            events=events,
            blocked_author_ids=blocked,
            bot_author_ids=bots,
        )

"""
Parameterized SQL query module for reading wiki revision history.

This module provides functions that generate PostgreSQL queries against the
wiki's own tables. Implements the Repository Pattern for clean separation
between the scanning/scoring logic and data access: the services never see
table or column names.

Tables read (never written):
    - revision: rev_id, rev_page, rev_user, rev_user_text, rev_timestamp,
      rev_len, rev_parent_id
    - page: page_id, page_namespace
    - mwuser: user_id, user_name, user_real_name (the user table in the
      PostgreSQL wiki schema)
    - user_groups: ug_user, ug_group
    - ipblocks: ipb_user

Size deltas use the parent-lookup approach: each revision is LEFT JOINed to
the revision named by its rev_parent_id, so a page creation yields a NULL
parent_length and the scanner treats it as 0.
"""

from typing import FrozenSet

from contribution_scores.models.enums import UserGroup


# Talk namespaces are odd-numbered and dropped by the MOD filter; these even
# namespaces are dropped explicitly.
ALWAYS_EXCLUDED_NAMESPACES: FrozenSet[int] = frozenset({3002})

# Personal user pages, excluded unless the caller asks for them
USER_NAMESPACE: int = 2

# User table name in the PostgreSQL wiki schema
USER_TABLE: str = "mwuser"


def get_excluded_namespaces(include_user_namespace: bool) -> FrozenSet[int]:
    """
    Return the even namespaces that never count toward a report.

    Args:
        include_user_namespace: When False, namespace 2 (user pages) is added.

    Returns:
        FrozenSet[int]: Namespace numbers to exclude.

    Example:
        >>> sorted(get_excluded_namespaces(False))
        [2, 3002]
    """
    if include_user_namespace:
        return ALWAYS_EXCLUDED_NAMESPACES
    return ALWAYS_EXCLUDED_NAMESPACES | {USER_NAMESPACE}


def get_revision_events_query(
    with_window: bool,
    include_user_namespace: bool = False,
) -> str:
    """
    Generate SQL returning one row per qualifying revision with its parent length.

    Window, namespace and anonymous-author conditions are applied in the
    database to keep the transferred row count down. Author exclusions
    (bots, blocked users) are applied by the scanner against the user-status
    snapshot, so they are not part of this query.

    Args:
        with_window: When True the query takes $1, a timestamptz cutoff, and
            only returns revisions strictly newer than it.
        include_user_namespace: When False, edits to user pages are skipped.

    Returns:
        str: PostgreSQL query string using asyncpg $n placeholders.

    Columns returned:
        revision_id, author_id, author_name, author_real_name, page_id,
        namespace, edit_timestamp, length, parent_length

    Example:
        >>> sql = get_revision_events_query(with_window=True)
        >>> rows = await conn.fetch(sql, cutoff)
    """
    excluded = ", ".join(
        str(ns) for ns in sorted(get_excluded_namespaces(include_user_namespace))
    )

    where_conditions = [
        # anonymous edits carry rev_user = 0
        "r.rev_user IS NOT NULL",
        "r.rev_user <> 0",
        "MOD(p.page_namespace, 2) = 0",
        f"p.page_namespace NOT IN ({excluded})",
    ]

    if with_window:
        where_conditions.append("r.rev_timestamp > $1")

    where_clause = "\n        AND ".join(where_conditions)

    query = f"""
    -- Revision events with parent lengths
    SELECT
        r.rev_id AS revision_id,
        r.rev_user AS author_id,
        r.rev_user_text AS author_name,
        u.user_real_name AS author_real_name,
        r.rev_page AS page_id,
        p.page_namespace AS namespace,
        r.rev_timestamp AS edit_timestamp,
        COALESCE(r.rev_len, 0) AS length,
        parent.rev_len AS parent_length
    FROM revision r
    JOIN page p ON p.page_id = r.rev_page
    LEFT JOIN revision parent ON parent.rev_id = r.rev_parent_id
    LEFT JOIN {USER_TABLE} u ON u.user_id = r.rev_user
    WHERE {where_clause}
    ORDER BY r.rev_timestamp, r.rev_id
    """

    return query


def get_blocked_users_query() -> str:
    """
    Generate SQL listing users that currently hold a block.

    IP blocks carry ipb_user = 0 and are not user blocks.

    Returns:
        str: Query returning a single user_id column.
    """
    return """
    SELECT DISTINCT ipb_user AS user_id
    FROM ipblocks
    WHERE ipb_user <> 0
    """


def get_bot_users_query() -> str:
    """
    Generate SQL listing members of the bot group.

    Returns:
        str: Query returning a single user_id column.
    """
    return f"""
    SELECT DISTINCT ug_user AS user_id
    FROM user_groups
    WHERE ug_group = '{UserGroup.BOT.value}'
    """

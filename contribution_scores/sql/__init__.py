"""
SQL Query Module for the Contribution Scores backend.

Provides parameterized SQL queries for reading revision history and the
user-status tables (blocks, group membership). Follows the Repository Pattern
for clean separation between business logic and data access.

Example usage:
    from contribution_scores.sql import get_revision_events_query

    sql = get_revision_events_query(with_window=True, include_user_namespace=False)
"""

from contribution_scores.sql.revision_queries import (
    get_revision_events_query,
    get_blocked_users_query,
    get_bot_users_query,
    get_excluded_namespaces,
    ALWAYS_EXCLUDED_NAMESPACES,
    USER_NAMESPACE,
    USER_TABLE,
)

__all__ = [
    'get_revision_events_query',
    'get_blocked_users_query',
    'get_bot_users_query',
    'get_excluded_namespaces',
    'ALWAYS_EXCLUDED_NAMESPACES',
    'USER_NAMESPACE',
    'USER_TABLE',
]

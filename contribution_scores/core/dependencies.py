"""
FastAPI dependency injection module for the Contribution Scores backend.

This module provides reusable FastAPI dependencies for configuration access and
the read-only revision store, so endpoint handlers never reach for globals.

Key Dependencies Provided:
- get_settings_dependency: Returns the cached Settings singleton
- get_revision_store: Returns a PostgresRevisionStore over the shared pool
- get_report_time: Returns the reference time for report windows
- SettingsDep: Type alias for injecting Settings into endpoints
- RevisionStoreDep: Type alias for injecting the revision store into endpoints
- ReportTimeDep: Type alias for injecting the report reference time

Usage Examples:
    @router.get("/contribution-scores")
    async def contribution_scores(
        store: RevisionStoreDep,
        settings: SettingsDep,
    ) -> ReportResponse:
        rows = await compute_report(store, ...)
        ...

Testing:
    app.dependency_overrides[get_revision_store] = lambda: in_memory_store
    app.dependency_overrides[get_settings_dependency] = lambda: test_settings
    app.dependency_overrides[get_report_time] = lambda: REFERENCE_NOW
"""

import logging
from datetime import datetime, timezone
from typing import Annotated

from fastapi import Depends, HTTPException

from contribution_scores.core.config import Settings, get_settings
from contribution_scores.core.database import get_db_pool
from contribution_scores.services.revision_store import (
    PostgresRevisionStore,
    RevisionStore,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Settings Dependency
# =============================================================================

def get_settings_dependency() -> Settings:
    """
    Return the Settings singleton instance.

    This is a thin wrapper around get_settings() to enable FastAPI's
    dependency override mechanism for testing.

    Returns:
        Settings: The cached Settings instance with all configuration values.

    Raises:
        pydantic.ValidationError: If DATABASE_URL is not configured.
    """
    return get_settings()


# =============================================================================
# Revision Store Dependency
# =============================================================================

async def get_revision_store() -> RevisionStore:
    """
    Return a revision store bound to the shared connection pool.

    The store is cheap to build; each report acquires its own connection
    from the pool for the duration of one snapshot read.

    Returns:
        RevisionStore: A PostgresRevisionStore over the asyncpg pool.

    Raises:
        HTTPException 500: If the pool has to be created lazily and the
            database cannot be reached.
    """
    try:
        pool = await get_db_pool()
    except Exception as e:
        logger.error(f"Error connecting to the wiki database: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Revision store unavailable"
        )
    return PostgresRevisionStore(pool)


# =============================================================================
# Report Time Dependency
# =============================================================================

def get_report_time() -> datetime:
    """
    Return the reference time for a report window (current UTC time).

    Overridden in tests to pin the window to a fixed instant.
    """
    return datetime.now(timezone.utc)


# =============================================================================
# Type Aliases for Dependency Injection
# =============================================================================

# Usage: async def endpoint(settings: SettingsDep)
SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]

# Usage: async def endpoint(store: RevisionStoreDep)
RevisionStoreDep = Annotated[RevisionStore, Depends(get_revision_store)]

# Usage: async def endpoint(now: ReportTimeDep)
ReportTimeDep = Annotated[datetime, Depends(get_report_time)]

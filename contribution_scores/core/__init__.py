"""
Core infrastructure package for the Contribution Scores backend.

Provides:
- Configuration management via pydantic-settings
- Async PostgreSQL connectivity via asyncpg
- FastAPI dependency injection utilities

This module re-exports key components from submodules so callers can write:

    from contribution_scores.core import get_settings, get_db_pool, RevisionStoreDep

Components Re-exported:
    Settings: Pydantic settings class with all configuration parameters
    get_settings: Function returning the cached Settings singleton
    init_db: Async function to initialize the database connection pool
    close_db: Async function to close the database connection pool
    get_db_pool: Async function to get the database connection pool
    get_settings_dependency: FastAPI dependency returning Settings
    get_revision_store: FastAPI dependency returning the revision store
    SettingsDep: Type alias for Settings dependency injection
    get_report_time: FastAPI dependency returning the report reference time
    RevisionStoreDep: Type alias for revision store dependency injection
    ReportTimeDep: Type alias for report reference time injection
"""

# =============================================================================
# Re-exports from contribution_scores.core.config
# =============================================================================
from contribution_scores.core.config import Settings, get_settings

# =============================================================================
# Re-exports from contribution_scores.core.database
# =============================================================================
from contribution_scores.core.database import init_db, close_db, get_db_pool

# =============================================================================
# Re-exports from contribution_scores.core.dependencies
# =============================================================================
from contribution_scores.core.dependencies import (
    get_settings_dependency,
    get_revision_store,
    get_report_time,
    SettingsDep,
    RevisionStoreDep,
    ReportTimeDep,
)

__all__ = [
    'Settings',
    'get_settings',
    'init_db',
    'close_db',
    'get_db_pool',
    'get_settings_dependency',
    'get_revision_store',
    'get_report_time',
    'SettingsDep',
    'RevisionStoreDep',
    'ReportTimeDep',
]

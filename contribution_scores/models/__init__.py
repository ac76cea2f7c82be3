"""
Package initialization file for Contribution Scores models.

Re-exports all Pydantic schemas and enumerations so other modules can write:

    from contribution_scores.models import AuthorAggregate, ReportRequest, ReportFlag
"""

# =============================================================================
# Enums
# =============================================================================

from contribution_scores.models.enums import (
    ReportFlag,
    UserGroup,
    RankingDimension,
)

# =============================================================================
# Schemas
# =============================================================================

from contribution_scores.models.schemas import (
    RevisionEvent,
    AuthorAggregate,
    RankedAuthor,
    ReportRequest,
    ReportOptions,
    ReportResponse,
)

__all__ = [
    # Enums
    'ReportFlag',
    'UserGroup',
    'RankingDimension',
    # Schemas
    'RevisionEvent',
    'AuthorAggregate',
    'RankedAuthor',
    'ReportRequest',
    'ReportOptions',
    'ReportResponse',
]

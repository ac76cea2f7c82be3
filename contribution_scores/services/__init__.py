"""
Contribution Scores Services Module

This module contains the ranking engine and its supporting services. Each
service is stateless and testable on its own.

Services:
- revision_store: Read-only snapshot access to revisions and user status
- revision_scanner: Window/namespace/author filtering and per-author aggregation
- score_combiner: Composite score, candidate union, ordering and truncation
- request_parsing: Include-parameter parsing and silent normalization
- report: compute_report entry point, preset reports, ranked hand-off

All services are designed to be consumed by the API layer
(contribution_scores/api/).
"""

# =============================================================================
# Revision Store Exports
# Imported first: core.dependencies depends on it.
# =============================================================================

from contribution_scores.services.revision_store import (
    RevisionStore,
    RevisionSnapshot,
    PostgresRevisionStore,
    fetch_revision_events,
    fetch_author_ids,
    row_to_revision_event,
)

# =============================================================================
# Revision Scanner Exports
# =============================================================================

from contribution_scores.services.revision_scanner import (
    scan_revisions,
    aggregate_events,
    select_qualifying_events,
    is_content_namespace,
    revision_delta,
    window_cutoff,
)

# =============================================================================
# Score Combiner Exports
# =============================================================================

from contribution_scores.services.score_combiner import (
    combine_scores,
    composite_score,
    build_candidate_union,
    rank_by,
)

# =============================================================================
# Request Parsing Exports
# =============================================================================

from contribution_scores.services.request_parsing import (
    parse_include_parameter,
    parse_options,
    normalize_request,
)

# =============================================================================
# Report Service Exports
# =============================================================================

from contribution_scores.services.report import (
    compute_report,
    run_report,
    compute_configured_reports,
    to_ranked_rows,
    build_report_response,
)

__all__ = [
    # Revision store
    'RevisionStore',
    'RevisionSnapshot',
    'PostgresRevisionStore',
    'fetch_revision_events',
    'fetch_author_ids',
    'row_to_revision_event',
    # Revision scanner
    'scan_revisions',
    'aggregate_events',
    'select_qualifying_events',
    'is_content_namespace',
    'revision_delta',
    'window_cutoff',
    # Score combiner
    'combine_scores',
    'composite_score',
    'build_candidate_union',
    'rank_by',
    # Request parsing
    'parse_include_parameter',
    'parse_options',
    'normalize_request',
    # Report
    'compute_report',
    'run_report',
    'compute_configured_reports',
    'to_ranked_rows',
    'build_report_response',
]

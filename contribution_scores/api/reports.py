"""
FastAPI router module for contribution score reports.

This module exposes the ranking engine as JSON. It is a data surface for the
external Report Formatter: it returns ordered rows with positional ranks and
unrounded scores, and leaves table markup, number formatting and localized
headings to the consumer.

Key Endpoints:
- GET /reports/contribution-scores - One report from query parameters
- GET /reports/contribution-scores/presets - Every configured preset report
- GET /reports/contribution-scores/include/{par} - One report from an
  include parameter "<limit>/<days>/<options>"

Parameter Handling:
- Out-of-range limit / days are normalized to configured defaults, never
  rejected with 4xx

Error Handling:
- Store failures are logged with traceback and answered with HTTP 500; no
  partial report is ever returned
- An empty window answers 200 with rows: []
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from contribution_scores.core.dependencies import (
    ReportTimeDep,
    RevisionStoreDep,
    SettingsDep,
)
from contribution_scores.models.schemas import ReportResponse
from contribution_scores.services.report import (
    build_report_response,
    compute_configured_reports,
    run_report,
)
from contribution_scores.services.request_parsing import (
    normalize_request,
    parse_include_parameter,
)


# =============================================================================
# Module Configuration
# =============================================================================

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports")


# =============================================================================
# GET /reports/contribution-scores
# =============================================================================


@router.get("/contribution-scores", response_model=ReportResponse)
async def get_contribution_scores(
    store: RevisionStoreDep,
    settings: SettingsDep,
    now: ReportTimeDep,
    days: Optional[int] = Query(
        default=None,
        description="Trailing window in days; 0 = all history"
    ),
    limit: Optional[int] = Query(
        default=None,
        description="Maximum rows (1..max_include_limit)"
    ),
    exclude_bots: Optional[bool] = Query(default=None, description="Drop bot edits"),
    exclude_blocked: Optional[bool] = Query(default=None, description="Drop blocked users' edits"),
    include_user_namespace: Optional[bool] = Query(
        default=None,
        description="Count edits to user pages; defaults to true for windowed reports"
    ),
    use_real_name: Optional[bool] = Query(default=None, description="Prefer real names"),
) -> ReportResponse:
    """
    Compute one contribution report.

    Example Request:
        GET /reports/contribution-scores?days=30&limit=20&exclude_bots=true

    Example Response:
        {
            "window_days": 30,
            "limit": 20,
            "generated_at": "2026-01-15T10:30:00Z",
            "options": {"sortable": true, "show_tools": true, "show_title": true},
            "rows": [
                {"rank": 1, "author_id": 7, "author_name": "ExampleUser", "score": 14.2, ...}
            ]
        }

    Raises:
        HTTPException 500: If the revision store cannot be read.
    """
    request = normalize_request(
        window_days=days,
        limit=limit,
        exclude_bots=exclude_bots,
        exclude_blocked=exclude_blocked,
        include_user_namespace=include_user_namespace,
        use_real_name=use_real_name,
        settings=settings,
    )

    try:
        aggregates = await run_report(store, request, now=now)
    except Exception as e:
        logger.error(f"Error computing contribution report: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Failed to compute contribution report"
        )

    return build_report_response(request, aggregates, generated_at=now)


# =============================================================================
# GET /reports/contribution-scores/presets
# =============================================================================


@router.get("/contribution-scores/presets", response_model=List[ReportResponse])
async def get_preset_contribution_scores(
    store: RevisionStoreDep,
    settings: SettingsDep,
    now: ReportTimeDep,
) -> List[ReportResponse]:
    """
    Compute every configured preset report, sharing one reference time.

    Raises:
        HTTPException 500: If no presets are configured or the store fails.
    """
    try:
        reports = await compute_configured_reports(store, settings, now=now)
    except ValueError as e:
        logger.error(f"Contribution report presets misconfigured: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.error(f"Error computing preset reports: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Failed to compute contribution reports"
        )

    return [
        build_report_response(request, aggregates, generated_at=now)
        for request, aggregates in reports
    ]


# =============================================================================
# GET /reports/contribution-scores/include/{par}
# =============================================================================


@router.get("/contribution-scores/include/{par:path}", response_model=ReportResponse)
async def get_included_contribution_scores(
    par: str,
    store: RevisionStoreDep,
    settings: SettingsDep,
    now: ReportTimeDep,
) -> ReportResponse:
    """
    Compute a report from an include parameter such as "25/30/nosort,notools".

    Raises:
        HTTPException 500: If the revision store cannot be read.
    """
    request, options = parse_include_parameter(par, settings=settings)

    try:
        aggregates = await run_report(store, request, now=now)
    except Exception as e:
        logger.error(f"Error computing included report '{par}': {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Failed to compute contribution report"
        )

    return build_report_response(request, aggregates, generated_at=now, options=options)

"""
Boundary validation for report parameters.

Reports can be embedded in a wiki page with an include parameter of the form

    "<limit>/<days>/<options>"

e.g. "25/30/nosort,notools". Every part is optional. This module turns that
string (or the equivalent explicit values from the HTTP query surface) into a
ReportRequest and ReportOptions once, so nothing downstream re-parses flags.

Invalid input is normalized, never rejected:
- limit missing, non-numeric, < 1 or > max_include_limit -> default_limit
- days missing, non-numeric or negative -> default_window_days (0 = all history)
- unknown option flags are ignored
"""

import logging
from typing import Optional, Tuple

from contribution_scores.core.config import Settings, get_settings
from contribution_scores.models.enums import ReportFlag
from contribution_scores.models.schemas import ReportOptions, ReportRequest


logger = logging.getLogger(__name__)


PARAMETER_SEPARATOR: str = "/"
OPTION_SEPARATOR: str = ","


def _parse_int(text: Optional[str]) -> Optional[int]:
    if text is None:
        return None
    try:
        return int(text.strip())
    except ValueError:
        return None


def normalize_limit(limit: Optional[int], settings: Settings) -> int:
    """
    Coerce a caller-supplied limit into the accepted range.

    Args:
        limit: Requested limit, or None.
        settings: Supplies default_limit and max_include_limit.

    Returns:
        int: limit when 1 <= limit <= max_include_limit, otherwise default_limit.
    """
    if limit is None or limit < 1 or limit > settings.max_include_limit:
        logger.debug(f"Normalizing limit {limit!r} to {settings.default_limit}")
        return settings.default_limit
    return limit


def normalize_window_days(window_days: Optional[int], settings: Settings) -> int:
    """
    Coerce a caller-supplied window into the accepted range.

    Args:
        window_days: Requested window in days, or None.
        settings: Supplies default_window_days.

    Returns:
        int: window_days when >= 0, otherwise default_window_days.
    """
    if window_days is None or window_days < 0:
        logger.debug(
            f"Normalizing window_days {window_days!r} to {settings.default_window_days}"
        )
        return settings.default_window_days
    return window_days


def parse_options(options: Optional[str]) -> ReportOptions:
    """
    Parse a comma-separated, case-insensitive flag list into ReportOptions.

    Example:
        >>> parse_options("NoSort, notitle")
        ReportOptions(sortable=False, show_tools=True, show_title=False)
    """
    flags = set()
    for raw in (options or "").split(OPTION_SEPARATOR):
        token = raw.strip().lower()
        if not token or token == "none":
            continue
        try:
            flags.add(ReportFlag(token))
        except ValueError:
            logger.debug(f"Ignoring unknown report option '{token}'")

    return ReportOptions(
        sortable=ReportFlag.NOSORT not in flags,
        show_tools=ReportFlag.NOTOOLS not in flags,
        show_title=ReportFlag.NOTITLE not in flags,
    )


def normalize_request(
    window_days: Optional[int] = None,
    limit: Optional[int] = None,
    exclude_bots: Optional[bool] = None,
    exclude_blocked: Optional[bool] = None,
    include_user_namespace: Optional[bool] = None,
    use_real_name: Optional[bool] = None,
    settings: Optional[Settings] = None,
) -> ReportRequest:
    """
    Build a ReportRequest from optional caller values and configured defaults.

    Toggles left as None take their value from settings; include_user_namespace
    defaults to True for windowed reports and False for all-history reports.

    Args:
        window_days: Requested window, normalized via normalize_window_days().
        limit: Requested limit, normalized via normalize_limit().
        exclude_bots: Override for settings.ignore_bots.
        exclude_blocked: Override for settings.ignore_blocked_users.
        include_user_namespace: Whether user pages count.
        use_real_name: Override for settings.use_real_name.
        settings: Settings to use (default: get_settings()).

    Returns:
        ReportRequest: Fully populated, validated request.
    """
    if settings is None:
        settings = get_settings()

    days = normalize_window_days(window_days, settings)

    return ReportRequest(
        window_days=days,
        limit=normalize_limit(limit, settings),
        exclude_bots=settings.ignore_bots if exclude_bots is None else exclude_bots,
        exclude_blocked=(
            settings.ignore_blocked_users if exclude_blocked is None else exclude_blocked
        ),
        include_user_namespace=(
            days > 0 if include_user_namespace is None else include_user_namespace
        ),
        use_real_name=settings.use_real_name if use_real_name is None else use_real_name,
    )


def parse_include_parameter(
    par: Optional[str],
    settings: Optional[Settings] = None,
) -> Tuple[ReportRequest, ReportOptions]:
    """
    Parse an include parameter "<limit>/<days>/<options>".

    Args:
        par: The raw parameter; None or "" means all defaults.
        settings: Settings to use (default: get_settings()).

    Returns:
        Tuple[ReportRequest, ReportOptions]: The normalized request and the
            presentation hints.

    Example:
        >>> request, options = parse_include_parameter("25/30/nosort")
        >>> request.limit, request.window_days, options.sortable
        (25, 30, False)
    """
    parts = (par or "").split(PARAMETER_SEPARATOR, 2) if par else []

    limit = _parse_int(parts[0]) if len(parts) > 0 else None
    window_days = _parse_int(parts[1]) if len(parts) > 1 else None
    options = parts[2] if len(parts) > 2 else None

    request = normalize_request(
        window_days=window_days,
        limit=limit,
        settings=settings,
    )
    return request, parse_options(options)

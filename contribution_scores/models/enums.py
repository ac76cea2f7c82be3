"""
Enumeration definitions for the Contribution Scores backend.

All enums inherit from both `str` and `Enum` so they serialize cleanly through
Pydantic models and JSON responses.
"""

from enum import Enum


class ReportFlag(str, Enum):
    """
    Presentation flags accepted in the options part of an include parameter.

    Values: 'nosort' | 'notools' | 'notitle'

    - NOSORT: Render the table without client-side sorting
    - NOTOOLS: Omit the per-user tool links next to each name
    - NOTITLE: Omit the "Last N days / Top N" heading

    The engine never looks at these; they travel to the formatter untouched.
    """
    NOSORT = "nosort"
    NOTOOLS = "notools"
    NOTITLE = "notitle"


class UserGroup(str, Enum):
    """
    User groups the report cares about.

    Only membership in the bot group changes the result (when bots are
    excluded); other groups are irrelevant to scoring.
    """
    BOT = "bot"


class RankingDimension(str, Enum):
    """
    Single-dimension rankings merged into the candidate union.

    - EDIT_COUNT: Authors ordered by number of qualifying edits
    - PAGE_COUNT: Authors ordered by number of distinct pages touched
    """
    EDIT_COUNT = "edit_count"
    PAGE_COUNT = "page_count"

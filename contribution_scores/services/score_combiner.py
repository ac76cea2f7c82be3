"""
Score combining service: turns author aggregates into the final ordering.

Composite score:
    score = page_count + sqrt(max(edit_count - page_count, 0)) * 2

page_count rewards breadth. The square-root term rewards repeat work on
already-touched pages with diminishing returns, so thousands of edits to a
single page cannot outrank broad contribution.

Candidate union:
    For a limit N > 0 the pool is the top N authors by edit_count united with
    the top N authors by page_count. Only that pool is scored and ordered, so
    an author who leads neither single-dimension ranking cannot enter the
    report. With N <= 0 both rankings are untruncated and the pool is every
    author.

Ordering:
    Descending score, ties broken by ascending author_id; truncated to N when
    N > 0. Rank is positional and assigned at presentation time.
"""

import logging
import math
from typing import Dict, List

from contribution_scores.models.enums import RankingDimension
from contribution_scores.models.schemas import AuthorAggregate


logger = logging.getLogger(__name__)


# Union order: the edit-count ranking is taken first, then page-count
UNION_DIMENSIONS: List[RankingDimension] = [
    RankingDimension.EDIT_COUNT,
    RankingDimension.PAGE_COUNT,
]


# =============================================================================
# Scoring
# =============================================================================


def composite_score(page_count: int, edit_count: int) -> float:
    """
    Compute the composite ranking value for one author.

    Args:
        page_count: Distinct pages touched.
        edit_count: Qualifying edits.

    Returns:
        float: Unrounded score.

    Example:
        >>> composite_score(2, 3)
        4.0
        >>> composite_score(1, 101)
        21.0
    """
    # edit_count >= page_count always holds; the clamp guards bad input
    return page_count + math.sqrt(max(edit_count - page_count, 0)) * 2


def score_aggregates(aggregates: List[AuthorAggregate]) -> List[AuthorAggregate]:
    """Return copies of the aggregates with `score` filled in."""
    return [
        aggregate.model_copy(
            update={'score': composite_score(aggregate.page_count, aggregate.edit_count)}
        )
        for aggregate in aggregates
    ]


# =============================================================================
# Single-Dimension Rankings and Union
# =============================================================================


def rank_by(
    aggregates: List[AuthorAggregate],
    dimension: RankingDimension,
    limit: int,
) -> List[AuthorAggregate]:
    """
    Order authors by one statistic, descending, and keep the top `limit`.

    Args:
        aggregates: Authors to rank.
        dimension: Which count to rank by.
        limit: Rows to keep; 0 or less keeps all.

    Returns:
        List[AuthorAggregate]: Ranked authors, ties by ascending author_id.
    """
    ranked = sorted(
        aggregates,
        key=lambda a: (-getattr(a, dimension.value), a.author_id),
    )
    if limit > 0:
        return ranked[:limit]
    return ranked


def build_candidate_union(
    aggregates: List[AuthorAggregate],
    limit: int,
) -> List[AuthorAggregate]:
    """
    Merge the top authors by edit count and by page count into one pool.

    Each author appears once, at the position of their first appearance.

    Args:
        aggregates: All authors from the scanner.
        limit: Size of each single-dimension ranking; 0 or less = unbounded.

    Returns:
        List[AuthorAggregate]: The candidate pool.
    """
    pool: Dict[int, AuthorAggregate] = {}
    for dimension in UNION_DIMENSIONS:
        for aggregate in rank_by(aggregates, dimension, limit):
            pool.setdefault(aggregate.author_id, aggregate)

    return list(pool.values())


# =============================================================================
# Final Ordering
# =============================================================================


def order_by_score(aggregates: List[AuthorAggregate], limit: int) -> List[AuthorAggregate]:
    """
    Sort scored authors by descending score (author_id breaks ties) and truncate.
    """
    ordered = sorted(aggregates, key=lambda a: (-a.score, a.author_id))
    if limit > 0:
        return ordered[:limit]
    return ordered


def combine_scores(
    aggregates: List[AuthorAggregate],
    limit: int,
) -> List[AuthorAggregate]:
    """
    Build the candidate union, score it, and return the final ordered report.

    Args:
        aggregates: Unscored aggregates from the revision scanner.
        limit: Maximum rows; 0 or less means no limit.

    Returns:
        List[AuthorAggregate]: At most `limit` scored authors (all candidates
            when limit <= 0), best first.

    Example:
        >>> report = combine_scores(aggregates, limit=10)
        >>> [a.author_name for a in report][:3]
        ['Alice', 'Bob', 'Carol']
    """
    candidates = build_candidate_union(aggregates, limit)
    scored = score_aggregates(candidates)
    report = order_by_score(scored, limit)

    logger.debug(
        f"Combined {len(aggregates)} authors into {len(candidates)} candidates, "
        f"returning {len(report)} (limit={limit})"
    )

    return report

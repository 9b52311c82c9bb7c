"""Progress arithmetic for judges and categories"""

from typing import Any, Dict


def completion_percentage(completed: int, total: int) -> float:
    """round(completed / total * 100, 2), or 0 when there is nothing to complete"""
    if total <= 0:
        return 0.0
    return round(completed / total * 100, 2)


def judge_progress(total: int, completed: int) -> Dict[str, Any]:
    """
    Progress of one judge in one category

    Args:
        total: Number of active candidates
        completed: Number of those candidates the judge has scored

    Returns:
        {total, completed, remaining, percentage}
    """
    return {
        'total': total,
        'completed': completed,
        'remaining': total - completed,
        'percentage': completion_percentage(completed, total),
    }


def category_progress(active_judges: int, active_candidates: int, submitted: int) -> Dict[str, Any]:
    """
    Progress of all active judges in one category

    Args:
        active_judges: Number of active judges
        active_candidates: Number of active candidates
        submitted: Scores submitted by active judges for active candidates

    Returns:
        {total_possible, submitted, percentage}
    """
    total_possible = active_judges * active_candidates
    return {
        'total_possible': total_possible,
        'submitted': submitted,
        'percentage': completion_percentage(submitted, total_possible),
    }

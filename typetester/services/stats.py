"""Per-user aggregate stats, recomputed from stored results on every request."""
from typing import Sequence

from sqlalchemy.orm import Session

from typetester.core.numbers import round_half_ceiling, round_half_up
from typetester.models.test_result import TestResult
from typetester.schemas.stats import StatsOutSchema
from typetester.services.results import load_user_results

RECENT_WINDOW = 10


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def compute_stats(results: Sequence[TestResult]) -> StatsOutSchema:
    """Fold results (most recent first) into a summary. Empty -> all zeros."""
    if not results:
        return StatsOutSchema()

    wpms = [r.wpm for r in results]
    accuracies = [r.accuracy for r in results]
    recent = wpms[:RECENT_WINDOW]

    return StatsOutSchema(
        best_wpm=max(wpms),
        avg_wpm=round_half_ceiling(_mean(wpms)),
        avg10_wpm=round_half_ceiling(_mean(recent)),
        best_accuracy=round_half_up(max(accuracies), 1),
        avg_accuracy=round_half_up(_mean(accuracies), 1),
        total_tests=len(results),
        total_time_seconds=sum(r.duration for r in results),
        total_chars_typed=sum(r.chars_correct + r.chars_wrong for r in results),
    )


def get_user_stats(db: Session, user_id: int) -> StatsOutSchema:
    return compute_stats(load_user_results(db, user_id))

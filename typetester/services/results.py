"""Result ingestion and listing."""
import logging
import math

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from typetester.core.errors import InternalError, MissingResultFieldsError
from typetester.core.numbers import to_int, to_number
from typetester.models.test_result import TestResult
from typetester.schemas.result import ResultSubmitSchema

logger = logging.getLogger(__name__)

DEFAULT_CONSISTENCY = 100
DEFAULT_DURATION = 30  # seconds
DEFAULT_LIMIT = 50
MAX_LIMIT = 100

SORT_WPM = "wpm"
SORT_CREATED_AT = "createdAt"


def save_result(db: Session, user_id: int | None, payload: ResultSubmitSchema) -> TestResult:
    """Store one finished test. user_id is None for guests.

    wpm and accuracy are checked for truthiness, so 0 counts as missing.
    """
    if not payload.wpm or not payload.accuracy:
        raise MissingResultFieldsError()

    result = TestResult(
        user_id=user_id,
        wpm=to_number(payload.wpm),
        raw_wpm=to_number(payload.raw_wpm or payload.wpm),
        accuracy=to_number(payload.accuracy),
        consistency=to_number(payload.consistency or DEFAULT_CONSISTENCY),
        chars_correct=to_int(payload.chars_correct or 0),
        chars_wrong=to_int(payload.chars_wrong or 0),
        duration=to_int(payload.duration or DEFAULT_DURATION),
        char_errors=payload.char_errors if payload.char_errors is not None else {},
        wpm_timeline=payload.wpm_timeline if payload.wpm_timeline is not None else [],
    )
    try:
        db.add(result)
        db.commit()
        db.refresh(result)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Save result error")
        raise InternalError()
    return result


def parse_limit(raw: str | None) -> int:
    """Missing, non-numeric or non-positive -> default; capped at MAX_LIMIT."""
    number = to_number(raw)
    if not math.isfinite(number) or number < 1:
        return DEFAULT_LIMIT
    return min(int(number), MAX_LIMIT)


def normalize_sort(raw: str | None) -> str:
    return SORT_WPM if raw == SORT_WPM else SORT_CREATED_AT


def list_results(db: Session, user_id: int, limit: int = DEFAULT_LIMIT, sort: str | None = None) -> list[TestResult]:
    """User's results, always descending by wpm or by creation time."""
    if normalize_sort(sort) == SORT_WPM:
        order = (TestResult.wpm.desc(), TestResult.id.desc())
    else:
        order = (TestResult.created_at.desc(), TestResult.id.desc())

    stmt = (
        select(TestResult)
        .where(TestResult.user_id == user_id)
        .order_by(*order)
        .limit(min(limit, MAX_LIMIT))
    )
    try:
        return list(db.scalars(stmt).all())
    except SQLAlchemyError:
        logger.exception("Get results error")
        raise InternalError()


def load_user_results(db: Session, user_id: int) -> list[TestResult]:
    """All of a user's results, most recent first."""
    stmt = (
        select(TestResult)
        .where(TestResult.user_id == user_id)
        .order_by(TestResult.created_at.desc(), TestResult.id.desc())
    )
    try:
        return list(db.scalars(stmt).all())
    except SQLAlchemyError:
        logger.exception("Stats error")
        raise InternalError()

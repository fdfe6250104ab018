"""Result routes: submit (auth optional), list own results, aggregate stats."""
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from typetester.db.session import get_db
from typetester.dependencies import get_current_user_id, get_optional_user_id
from typetester.schemas.result import (
    ResultEnvelopeSchema,
    ResultListSchema,
    ResultOutSchema,
    ResultSubmitSchema,
)
from typetester.schemas.stats import StatsOutSchema
from typetester.services.results import list_results, parse_limit, save_result
from typetester.services.stats import get_user_stats

router = APIRouter(prefix="/api/results", tags=["results"])


@router.post("", response_model=ResultEnvelopeSchema, status_code=status.HTTP_201_CREATED)
def submit_result(
    body: ResultSubmitSchema,
    user_id: Annotated[int | None, Depends(get_optional_user_id)],
    db: Annotated[Session, Depends(get_db)],
):
    """Save a finished test; attributed to the user when a valid token is sent."""
    result = save_result(db, user_id, body)
    return ResultEnvelopeSchema(result=ResultOutSchema.model_validate(result))


@router.get("/me", response_model=ResultListSchema)
def my_results(
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[Session, Depends(get_db)],
    limit: str | None = None,
    sort: str | None = None,
):
    # limit is parsed loosely: junk falls back to the default
    results = list_results(db, user_id, limit=parse_limit(limit), sort=sort)
    return ResultListSchema(results=[ResultOutSchema.model_validate(r) for r in results])


@router.get("/stats", response_model=StatsOutSchema)
def my_stats(
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[Session, Depends(get_db)],
):
    return get_user_stats(db, user_id)

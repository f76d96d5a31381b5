from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from courseguide.api.deps import get_db
from courseguide.schemas.calendar import CalendarFilters, CalendarOut
from courseguide.services.calendar import revision_calendar

router = APIRouter()


@router.get("/{revision_id}", response_model=CalendarOut)
def get_calendar(
    revision_id: str,
    filters: Annotated[CalendarFilters, Query()],
    db: Session = Depends(get_db),
) -> CalendarOut:
    return revision_calendar(db, revision_id, filters)

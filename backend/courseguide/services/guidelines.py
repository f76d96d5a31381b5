from __future__ import annotations

import logging
import math

from sqlalchemy import and_, func, or_, select
from sqlalchemy.orm import Session, selectinload

from courseguide.core.exceptions import ResourceNotFoundError
from courseguide.models.guideline import Guideline, GuidelineDay, GuidelineTime
from courseguide.models.mixins import DAY_COLUMNS, SEMESTER_COLUMNS
from courseguide.schemas.guideline import GuidelineBase, GuidelineOut, GuidelinePage, GuidelineQuery

logger = logging.getLogger(__name__)

FULL_DAY_START = 0
FULL_DAY_END = 2359


def guideline_filters(query: GuidelineQuery) -> list:
    filters = [
        Guideline.credits >= query.credits_min,
        Guideline.credits <= query.credits_max,
        Guideline.meeting_amount >= query.meeting_min,
        Guideline.meeting_amount <= query.meeting_max,
    ]

    semesters = [getattr(Guideline, column) for column in SEMESTER_COLUMNS if getattr(query, column)]
    if semesters:
        filters.append(or_(*semesters))

    days = [getattr(GuidelineDay, column) for column in DAY_COLUMNS if getattr(query, column)]
    if days:
        filters.append(Guideline.days.any(or_(*days)))

    if query.start_time > FULL_DAY_START or query.end_time < FULL_DAY_END:
        filters.append(
            Guideline.times.any(
                and_(GuidelineTime.start_time >= query.start_time, GuidelineTime.end_time <= query.end_time)
            )
        )
    return filters


def query_guidelines(db: Session, query: GuidelineQuery, page_size: int) -> GuidelinePage:
    filters = guideline_filters(query)
    total = db.execute(select(func.count(Guideline.id)).where(*filters)).scalar_one()
    guidelines = list(
        db.execute(
            select(Guideline)
            .where(*filters)
            .options(selectinload(Guideline.days), selectinload(Guideline.times))
            .order_by(Guideline.credits, Guideline.meeting_amount, Guideline.created_at)
            .offset((query.page - 1) * page_size)
            .limit(page_size)
        ).scalars()
    )
    return GuidelinePage(
        result=[GuidelineOut.model_validate(guideline) for guideline in guidelines],
        page=query.page,
        total_pages=math.ceil(total / page_size),
    )


def get_guideline(db: Session, guideline_id: str) -> Guideline:
    guideline = db.get(Guideline, guideline_id)
    if guideline is None:
        raise ResourceNotFoundError("Guideline", guideline_id)
    return guideline


def apply_payload(guideline: Guideline, payload: GuidelineBase) -> None:
    for column in SEMESTER_COLUMNS:
        setattr(guideline, column, getattr(payload, column))
    guideline.credits = payload.credits
    guideline.meeting_amount = payload.meeting_amount
    guideline.days = [GuidelineDay(**day.model_dump()) for day in payload.days]
    guideline.times = [GuidelineTime(start_time=time.start_time, end_time=time.end_time) for time in payload.times]


def create_guideline(db: Session, payload: GuidelineBase) -> Guideline:
    guideline = Guideline()
    apply_payload(guideline, payload)
    db.add(guideline)
    db.commit()
    db.refresh(guideline)
    logger.info("Created guideline %s", guideline.id)
    return guideline


def update_guideline(db: Session, guideline_id: str, payload: GuidelineBase) -> Guideline:
    guideline = get_guideline(db, guideline_id)
    apply_payload(guideline, payload)
    db.commit()
    db.refresh(guideline)
    return guideline


def delete_guideline(db: Session, guideline_id: str) -> None:
    guideline = get_guideline(db, guideline_id)
    db.delete(guideline)
    db.commit()
    logger.info("Deleted guideline %s", guideline_id)

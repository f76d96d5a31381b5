import logging
import math
from pathlib import PurePath

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from courseguide.api.deps import get_app_settings, get_db
from courseguide.core.config import Settings
from courseguide.models.schedule import Schedule, ScheduleRevision
from courseguide.schemas.course import CourseOut
from courseguide.schemas.revision import (
    CommitRevisionRequest,
    IngestionResult,
    RevisionOut,
    ScheduleOut,
    SchedulePage,
    SemesterOut,
    VerifyColumnsRequest,
)
from courseguide.services.calendar import list_revision_courses, revision_semesters
from courseguide.services.ingestion import create_schedule_revision, verify_organized_columns
from courseguide.services.spreadsheet import read_first_sheet

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/upload", response_model=RevisionOut, status_code=status.HTTP_201_CREATED)
def upload_revision(
    file: UploadFile = File(...),
    name: str | None = Form(default=None, max_length=200),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> RevisionOut:
    data = file.file.read()
    if len(data) > settings.max_upload_size_bytes:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="Spreadsheet is too large")
    # Reject unreadable workbooks now instead of at verification time.
    read_first_sheet(data)

    file_name = file.filename or "schedule.xlsx"
    revision = ScheduleRevision(
        name=(name or PurePath(file_name).stem)[:200],
        file_name=file_name,
        file=data,
        onboarding=True,
    )
    db.add(revision)
    db.commit()
    db.refresh(revision)
    logger.info("Stored onboarding revision %s from %s (%s bytes)", revision.id, file_name, len(data))
    return revision


@router.get("/", response_model=SchedulePage)
def list_schedules(
    search: str = Query(default="", max_length=200),
    page: int = Query(default=1, ge=1),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> SchedulePage:
    filters = []
    if search.strip():
        filters.append(Schedule.revisions.any(ScheduleRevision.name.contains(search.strip())))

    page_size = settings.revision_page_size
    total = db.execute(select(func.count(Schedule.id)).where(*filters)).scalar_one()
    schedules = db.execute(
        select(Schedule)
        .where(*filters)
        .options(selectinload(Schedule.revisions))
        .order_by(Schedule.created_at.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    ).scalars()

    result = []
    for schedule in schedules:
        revisions = [RevisionOut.model_validate(revision) for revision in schedule.revisions]
        result.append(
            ScheduleOut(
                id=schedule.id,
                created_at=schedule.created_at,
                main=revisions[0] if revisions else None,
                revisions=revisions[1:],
            )
        )
    return SchedulePage(result=result, page=page, total_pages=math.ceil(total / page_size))


@router.delete("/{revision_id}")
def delete_revision(revision_id: str, db: Session = Depends(get_db)) -> dict:
    revision = db.get(ScheduleRevision, revision_id)
    if revision is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Schedule revision not found")
    db.delete(revision)
    db.commit()
    return {"success": True}


@router.post("/{revision_id}/verify", response_model=IngestionResult)
def verify_revision(revision_id: str, payload: VerifyColumnsRequest, db: Session = Depends(get_db)) -> IngestionResult:
    return verify_organized_columns(db, revision_id, payload.columns)


@router.post("/{revision_id}/commit", response_model=IngestionResult)
def commit_revision(revision_id: str, payload: CommitRevisionRequest, db: Session = Depends(get_db)) -> IngestionResult:
    return create_schedule_revision(db, revision_id, payload.columns, payload.name)


@router.get("/{revision_id}/courses", response_model=list[CourseOut])
def list_courses(revision_id: str, db: Session = Depends(get_db)) -> list[CourseOut]:
    return list_revision_courses(db, revision_id)


@router.get("/{revision_id}/semesters", response_model=list[SemesterOut])
def list_semesters(revision_id: str, db: Session = Depends(get_db)) -> list[SemesterOut]:
    return [SemesterOut(**semester) for semester in revision_semesters(db, revision_id)]

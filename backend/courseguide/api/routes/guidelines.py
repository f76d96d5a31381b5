from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from courseguide.api.deps import get_app_settings, get_db
from courseguide.core.config import Settings
from courseguide.schemas.guideline import GuidelineCreate, GuidelineOut, GuidelinePage, GuidelineQuery, GuidelineUpdate
from courseguide.services import guidelines as guideline_service

router = APIRouter()


@router.get("/", response_model=GuidelinePage)
def list_guidelines(
    query: Annotated[GuidelineQuery, Query()],
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> GuidelinePage:
    return guideline_service.query_guidelines(db, query, settings.guideline_page_size)


@router.post("/", response_model=GuidelineOut, status_code=status.HTTP_201_CREATED)
def create_guideline(payload: GuidelineCreate, db: Session = Depends(get_db)) -> GuidelineOut:
    return guideline_service.create_guideline(db, payload)


@router.put("/{guideline_id}", response_model=GuidelineOut)
def update_guideline(guideline_id: str, payload: GuidelineUpdate, db: Session = Depends(get_db)) -> GuidelineOut:
    return guideline_service.update_guideline(db, guideline_id, payload)


@router.delete("/{guideline_id}")
def delete_guideline(guideline_id: str, db: Session = Depends(get_db)) -> dict:
    guideline_service.delete_guideline(db, guideline_id)
    return {"success": True}

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from courseguide.db.base import Base
from courseguide.models.mixins import DayFlagsMixin, SemesterFlagsMixin


class Guideline(SemesterFlagsMixin, Base):
    __tablename__ = "guidelines"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    credits: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    meeting_amount: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), onupdate=func.now())

    days: Mapped[list["GuidelineDay"]] = relationship(back_populates="guideline", cascade="all, delete-orphan")
    times: Mapped[list["GuidelineTime"]] = relationship(
        back_populates="guideline",
        cascade="all, delete-orphan",
        order_by="GuidelineTime.start_time",
    )


class GuidelineDay(DayFlagsMixin, Base):
    __tablename__ = "guideline_days"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    guideline_id: Mapped[str] = mapped_column(
        ForeignKey("guidelines.id", ondelete="CASCADE"), nullable=False, index=True
    )

    guideline: Mapped[Guideline] = relationship(back_populates="days")


class GuidelineTime(Base):
    __tablename__ = "guideline_times"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    guideline_id: Mapped[str] = mapped_column(
        ForeignKey("guidelines.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Military-time integers, e.g. 1430 for 2:30 PM.
    start_time: Mapped[int] = mapped_column(Integer, nullable=False)
    end_time: Mapped[int] = mapped_column(Integer, nullable=False)

    guideline: Mapped[Guideline] = relationship(back_populates="times")

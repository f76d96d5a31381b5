import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from courseguide.db.base import Base


class Schedule(Base):
    __tablename__ = "schedules"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    revisions: Mapped[list["ScheduleRevision"]] = relationship(
        back_populates="schedule",
        order_by="ScheduleRevision.created_at.desc()",
    )


class ScheduleRevision(Base):
    __tablename__ = "schedule_revisions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    schedule_id: Mapped[str | None] = mapped_column(
        ForeignKey("schedules.id", ondelete="CASCADE"), nullable=True, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    file_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    file: Mapped[bytes | None] = mapped_column(LargeBinary, nullable=True)
    # True from upload until the courses are committed.
    onboarding: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), onupdate=func.now())

    schedule: Mapped[Schedule | None] = relationship(back_populates="revisions")
    courses: Mapped[list["Course"]] = relationship(  # noqa: F821
        back_populates="revision",
        cascade="all, delete-orphan",
    )

"""
SQLAlchemy table models.
Rows are converted to domain models (models/domain) by the repositories.
"""

from sqlalchemy import (
    Column,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from infrastructure.database import Base, TimestampMixin


class UserRow(Base, TimestampMixin):
    """Application user."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)


class ExerciseRow(Base, TimestampMixin):
    """Exercise catalogue entry."""

    __tablename__ = "exercises"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    muscle_group = Column(String(100))
    equipment = Column(String(100))
    video_url = Column(String(500))


class MethodRow(Base, TimestampMixin):
    """Training method (e.g. drop set, rest-pause)."""

    __tablename__ = "methods"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")


class TrainingSheetRow(Base, TimestampMixin):
    """Workout sheet made of training days."""

    __tablename__ = "training_sheets"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    public_name = Column(String(255))
    description = Column(Text, nullable=False, default="")

    days = relationship(
        "TrainingDayRow",
        back_populates="sheet",
        cascade="all, delete-orphan",
        order_by="TrainingDayRow.day_number",
    )


class TrainingDayRow(Base):
    """One day of a training sheet."""

    __tablename__ = "training_days"
    __table_args__ = (UniqueConstraint("sheet_id", "day_number"),)

    id = Column(Integer, primary_key=True)
    sheet_id = Column(Integer, ForeignKey("training_sheets.id", ondelete="CASCADE"), nullable=False)
    day_number = Column(Integer, nullable=False)
    name = Column(String(255))

    sheet = relationship("TrainingSheetRow", back_populates="days")
    entries = relationship(
        "SheetEntryRow",
        back_populates="day",
        cascade="all, delete-orphan",
        order_by="SheetEntryRow.order",
    )


class SheetEntryRow(Base):
    """Exercise performed with a method on a training day."""

    __tablename__ = "sheet_entries"

    id = Column(Integer, primary_key=True)
    day_id = Column(Integer, ForeignKey("training_days.id", ondelete="CASCADE"), nullable=False)
    exercise_id = Column(Integer, ForeignKey("exercises.id"), nullable=False)
    method_id = Column(Integer, ForeignKey("methods.id"))
    order = Column(Integer, nullable=False, default=0)
    series = Column(Integer)
    repetitions = Column(String(50))
    rest_seconds = Column(Integer)

    day = relationship("TrainingDayRow", back_populates="entries")
    exercise = relationship("ExerciseRow")
    method = relationship("MethodRow")


class TrainingScheduleRow(Base, TimestampMixin):
    """Weekly plan assigning training sheets to week days."""

    __tablename__ = "training_schedules"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")

    week_days = relationship(
        "ScheduleDayRow",
        back_populates="schedule",
        cascade="all, delete-orphan",
        order_by="ScheduleDayRow.day",
    )


class ScheduleDayRow(Base):
    """Week day (1-7) of a schedule."""

    __tablename__ = "schedule_days"
    __table_args__ = (UniqueConstraint("schedule_id", "day"),)

    id = Column(Integer, primary_key=True)
    schedule_id = Column(Integer, ForeignKey("training_schedules.id", ondelete="CASCADE"), nullable=False)
    day = Column(Integer, nullable=False)
    training_sheet_id = Column(Integer, ForeignKey("training_sheets.id", ondelete="SET NULL"))
    custom_name = Column(String(255))

    schedule = relationship("TrainingScheduleRow", back_populates="week_days")
    training_sheet = relationship("TrainingSheetRow")

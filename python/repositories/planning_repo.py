"""
Training sheets and schedules repositories.

Sheets are stored as sheet → days → entries; schedules as
schedule → week days. Nested collections are always written as a whole.
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from repositories.base import BaseRepository
from repositories.catalogue_repo import ExercisesRepository, MethodsRepository
from models.domain.training_sheet import TrainingSheet, TrainingSheetSummary
from models.domain.schedule import TrainingSchedule
from models.requests.planning import (
    TrainingDayInput,
    TrainingSheetCreate,
    ScheduleDayInput,
    TrainingScheduleCreate,
)
from models.tables import (
    TrainingSheetRow,
    TrainingDayRow,
    SheetEntryRow,
    TrainingScheduleRow,
    ScheduleDayRow,
)
from core.exceptions import (
    ScheduleNotFoundError,
    TrainingSheetNotFoundError,
    ValidationError,
)


class TrainingSheetsRepository(BaseRepository):
    """
    Repository for training_sheets and their nested days/entries.
    """

    row_class = TrainingSheetRow
    model_class = TrainingSheet
    entity_name = "Training sheet"

    def list_summaries(self) -> List[TrainingSheetSummary]:
        """
        Available sheets for selection, newest first.
        """
        query = select(
            TrainingSheetRow.id, TrainingSheetRow.name, TrainingSheetRow.public_name
        ).order_by(TrainingSheetRow.created_at.desc(), TrainingSheetRow.id.desc())

        try:
            rows = self.db.execute(query).all()
        except SQLAlchemyError as e:
            self._handle_error("list_summaries", e)
        return [
            TrainingSheetSummary(id=row.id, name=row.name, public_name=row.public_name)
            for row in rows
        ]

    def get_details(self, id: int) -> TrainingSheet:
        """
        Full sheet with days, entries, exercises and methods.
        """
        query = (
            select(TrainingSheetRow)
            .where(TrainingSheetRow.id == id)
            .options(
                selectinload(TrainingSheetRow.days)
                .selectinload(TrainingDayRow.entries)
                .selectinload(SheetEntryRow.exercise),
                selectinload(TrainingSheetRow.days)
                .selectinload(TrainingDayRow.entries)
                .selectinload(SheetEntryRow.method),
            )
        )
        try:
            row = self.db.scalars(query).first()
        except SQLAlchemyError as e:
            self._handle_error("get_details", e)
        if row is None:
            raise TrainingSheetNotFoundError(id)
        return self._to_model(row)

    def create_sheet(self, data: TrainingSheetCreate) -> TrainingSheet:
        self._check_references(data.days)
        row = TrainingSheetRow(
            name=data.name,
            public_name=data.public_name,
            description=data.description,
            days=self._build_days(data.days),
        )
        self.db.add(row)
        self._commit("create_sheet")
        self.logger.info(f"Created training sheet {row.id} with {len(data.days)} day(s)")
        return self.get_details(row.id)

    def replace_sheet(self, id: int, data: TrainingSheetCreate) -> TrainingSheet:
        row = self.db.get(TrainingSheetRow, id)
        if row is None:
            raise TrainingSheetNotFoundError(id)
        self._check_references(data.days)

        row.name = data.name
        row.public_name = data.public_name
        row.description = data.description
        row.days.clear()
        # Flush removals first so (sheet_id, day_number) can be reused
        self.db.flush()
        row.days.extend(self._build_days(data.days))
        self._commit("replace_sheet")
        self.logger.info(f"Replaced training sheet {id}")
        return self.get_details(id)

    def existing_ids(self, ids: List[int]) -> set:
        if not ids:
            return set()
        query = select(TrainingSheetRow.id).where(TrainingSheetRow.id.in_(ids))
        return set(self.db.scalars(query).all())

    # ============================================================
    # Helper Methods
    # ============================================================

    def _check_references(self, days: List[TrainingDayInput]) -> None:
        exercise_ids = {e.exercise_id for day in days for e in day.entries}
        method_ids = {e.method_id for day in days for e in day.entries if e.method_id is not None}

        missing = exercise_ids - ExercisesRepository(self.db).existing_ids(list(exercise_ids))
        if missing:
            raise ValidationError(f"Unknown exercise id(s): {sorted(missing)}", field="exercise_id")

        missing = method_ids - MethodsRepository(self.db).existing_ids(list(method_ids))
        if missing:
            raise ValidationError(f"Unknown method id(s): {sorted(missing)}", field="method_id")

    @staticmethod
    def _build_days(days: List[TrainingDayInput]) -> List[TrainingDayRow]:
        rows = []
        for day in days:
            entries = [
                SheetEntryRow(
                    exercise_id=entry.exercise_id,
                    method_id=entry.method_id,
                    order=entry.order if entry.order is not None else position,
                    series=entry.series,
                    repetitions=entry.repetitions,
                    rest_seconds=entry.rest_seconds,
                )
                for position, entry in enumerate(day.entries)
            ]
            rows.append(TrainingDayRow(day_number=day.day_number, name=day.name, entries=entries))
        return rows


class SchedulesRepository(BaseRepository):
    """
    Repository for training_schedules and their week days.
    """

    row_class = TrainingScheduleRow
    model_class = TrainingSchedule
    entity_name = "Training schedule"

    def get_by_id_or_raise(self, id: int) -> TrainingSchedule:
        schedule = self.get_by_id(id)
        if schedule is None:
            raise ScheduleNotFoundError(id)
        return schedule

    def create_schedule(self, data: TrainingScheduleCreate) -> TrainingSchedule:
        self._check_sheets(data.week_days)
        row = TrainingScheduleRow(
            name=data.name,
            description=data.description,
            week_days=self._build_days(data.week_days),
        )
        self.db.add(row)
        self._commit("create_schedule")
        self.db.refresh(row)
        self.logger.info(f"Saved training schedule {row.id} ({data.name})")
        return self._to_model(row)

    def replace_schedule(self, id: int, data: TrainingScheduleCreate) -> TrainingSchedule:
        row = self.db.get(TrainingScheduleRow, id)
        if row is None:
            raise ScheduleNotFoundError(id)
        self._check_sheets(data.week_days)

        row.name = data.name
        row.description = data.description
        row.week_days.clear()
        self.db.flush()
        row.week_days.extend(self._build_days(data.week_days))
        self._commit("replace_schedule")
        self.db.refresh(row)
        self.logger.info(f"Replaced training schedule {id}")
        return self._to_model(row)

    def _check_sheets(self, week_days: List[ScheduleDayInput]) -> None:
        sheet_ids = {d.training_sheet_id for d in week_days if d.training_sheet_id is not None}
        missing = sheet_ids - TrainingSheetsRepository(self.db).existing_ids(list(sheet_ids))
        if missing:
            raise ValidationError(
                f"Unknown training sheet id(s): {sorted(missing)}", field="training_sheet_id"
            )

    @staticmethod
    def _build_days(week_days: List[ScheduleDayInput]) -> List[ScheduleDayRow]:
        return [
            ScheduleDayRow(
                day=week_day.day,
                training_sheet_id=week_day.training_sheet_id,
                custom_name=week_day.custom_name,
            )
            for week_day in sorted(week_days, key=lambda d: d.day)
        ]

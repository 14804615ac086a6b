from __future__ import annotations

from datetime import datetime

from pydantic import field_serializer, field_validator, model_validator

from jobtracker.models.interview import InterviewType
from jobtracker.schemas.base import CamelModel, reject_explicit_nulls, to_naive_utc, to_utc_iso


class InterviewCreate(CamelModel):
    date: datetime
    type: InterviewType
    notes: str | None = None

    @field_validator("date")
    @classmethod
    def _normalize_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class InterviewUpdate(CamelModel):
    date: datetime | None = None
    type: InterviewType | None = None
    notes: str | None = None

    @field_validator("date")
    @classmethod
    def _normalize_date(cls, value: datetime | None) -> datetime | None:
        return to_naive_utc(value)

    @model_validator(mode="after")
    def _required_columns_not_null(self) -> "InterviewUpdate":
        reject_explicit_nulls(self, ("date", "type"))
        return self


class InterviewOut(CamelModel):
    id: int
    job_application_id: int
    date: datetime
    type: InterviewType
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_serializer("date", "created_at", "updated_at")
    def _as_utc(self, value: datetime | None) -> str | None:
        return to_utc_iso(value)

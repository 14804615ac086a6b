from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_serializer, field_validator, model_validator

from jobtracker.models.job_application import ApplicationStatus
from jobtracker.schemas.base import CamelModel, reject_explicit_nulls, to_naive_utc, to_utc_iso, validate_http_url
from jobtracker.schemas.interview import InterviewOut


class JobCreate(CamelModel):
    title: str = Field(min_length=1, max_length=500)
    company: str = Field(min_length=1, max_length=255)
    location: str | None = Field(default=None, max_length=255)
    salary: str | None = Field(default=None, max_length=255)
    url: str = Field(min_length=1, max_length=2000)
    status: ApplicationStatus = ApplicationStatus.SAVED
    date_applied: datetime | None = None
    notes: str | None = None
    resume_version: str | None = Field(default=None, max_length=255)
    cover_letter_used: bool | None = None

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        return validate_http_url(value)

    @field_validator("date_applied")
    @classmethod
    def _normalize_date_applied(cls, value: datetime | None) -> datetime | None:
        return to_naive_utc(value)


class JobUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=500)
    company: str | None = Field(default=None, min_length=1, max_length=255)
    location: str | None = Field(default=None, max_length=255)
    salary: str | None = Field(default=None, max_length=255)
    url: str | None = Field(default=None, min_length=1, max_length=2000)
    status: ApplicationStatus | None = None
    date_applied: datetime | None = None
    notes: str | None = None
    resume_version: str | None = Field(default=None, max_length=255)
    cover_letter_used: bool | None = None

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: str | None) -> str | None:
        return validate_http_url(value) if value is not None else value

    @field_validator("date_applied")
    @classmethod
    def _normalize_date_applied(cls, value: datetime | None) -> datetime | None:
        return to_naive_utc(value)

    @model_validator(mode="after")
    def _required_columns_not_null(self) -> "JobUpdate":
        reject_explicit_nulls(self, ("title", "company", "url", "status"))
        return self


class JobOut(CamelModel):
    id: int
    user_id: int
    title: str
    company: str
    location: str | None = None
    salary: str | None = None
    url: str
    status: ApplicationStatus
    date_added: datetime
    date_applied: datetime | None = None
    notes: str | None = None
    resume_version: str | None = None
    cover_letter_used: bool | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    interviews: list[InterviewOut] = []

    @field_serializer("date_added", "date_applied", "created_at", "updated_at")
    def _as_utc(self, value: datetime | None) -> str | None:
        return to_utc_iso(value)


class JobStatsOut(CamelModel):
    total: int = 0
    by_status: dict[str, int] = {}
    response_rate: float = 0
    average_time_to_response: int = 0

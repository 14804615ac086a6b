from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session, selectinload

from jobtracker.auth import get_current_user
from jobtracker.database import get_db
from jobtracker.models.job_application import ApplicationStatus, JobApplication
from jobtracker.models.user import User
from jobtracker.schemas.job import JobCreate, JobOut, JobStatsOut, JobUpdate
from jobtracker.services.stats import compute_job_stats


router = APIRouter()
logger = logging.getLogger(__name__)


def get_owned_job(db: Session, job_id: int, user_id: int) -> JobApplication:
    """Load a job scoped to its owner; foreign and missing rows are both 404."""
    job = (
        db.query(JobApplication)
        .options(selectinload(JobApplication.interviews))
        .filter(JobApplication.id == job_id, JobApplication.user_id == user_id)
        .first()
    )
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.get("", response_model=list[JobOut])
def list_jobs(
    status_filter: ApplicationStatus | None = Query(default=None, alias="status"),
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int | None = Query(default=None, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[JobApplication]:
    query = (
        db.query(JobApplication)
        .options(selectinload(JobApplication.interviews))
        .filter(JobApplication.user_id == current_user.id)
    )
    if status_filter is not None:
        query = query.filter(JobApplication.status == ApplicationStatus(status_filter).value)
    query = query.order_by(JobApplication.date_added.desc(), JobApplication.id.desc())
    if offset:
        query = query.offset(offset)
    if limit is not None:
        query = query.limit(limit)
    return query.all()


@router.post("", response_model=JobOut, status_code=status.HTTP_201_CREATED)
def create_job(
    payload: JobCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> JobApplication:
    job = JobApplication(user_id=current_user.id, **payload.model_dump())
    db.add(job)
    db.commit()
    db.refresh(job)
    logger.info("User %s saved job %s (%s at %s)", current_user.id, job.id, job.title, job.company)
    return job


@router.get("/stats", response_model=JobStatsOut)
def job_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> JobStatsOut:
    rows = (
        db.query(JobApplication.status, JobApplication.date_applied)
        .filter(JobApplication.user_id == current_user.id)
        .all()
    )
    return JobStatsOut(**compute_job_stats(rows))


@router.get("/{job_id}", response_model=JobOut)
def get_job(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> JobApplication:
    return get_owned_job(db, job_id, current_user.id)


@router.put("/{job_id}", response_model=JobOut)
def update_job(
    job_id: int,
    payload: JobUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> JobApplication:
    job = get_owned_job(db, job_id, current_user.id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(job, field, value)
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    job = get_owned_job(db, job_id, current_user.id)
    db.delete(job)
    db.commit()
    logger.info("User %s deleted job %s", current_user.id, job_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from jobtracker.api.jobs import get_owned_job
from jobtracker.auth import get_current_user
from jobtracker.database import get_db
from jobtracker.models.interview import Interview
from jobtracker.models.user import User
from jobtracker.schemas.interview import InterviewCreate, InterviewOut, InterviewUpdate


router = APIRouter()


def _get_interview(db: Session, job_id: int, interview_id: int) -> Interview:
    interview = (
        db.query(Interview)
        .filter(Interview.id == interview_id, Interview.job_application_id == job_id)
        .first()
    )
    if not interview:
        raise HTTPException(status_code=404, detail="Interview not found")
    return interview


@router.get("/{job_id}/interviews", response_model=list[InterviewOut])
def list_interviews(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[Interview]:
    get_owned_job(db, job_id, current_user.id)
    return (
        db.query(Interview)
        .filter(Interview.job_application_id == job_id)
        .order_by(Interview.date.asc())
        .all()
    )


@router.post("/{job_id}/interviews", response_model=InterviewOut, status_code=status.HTTP_201_CREATED)
def create_interview(
    job_id: int,
    payload: InterviewCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Interview:
    get_owned_job(db, job_id, current_user.id)
    interview = Interview(job_application_id=job_id, **payload.model_dump())
    db.add(interview)
    db.commit()
    db.refresh(interview)
    return interview


@router.put("/{job_id}/interviews/{interview_id}", response_model=InterviewOut)
def update_interview(
    job_id: int,
    interview_id: int,
    payload: InterviewUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Interview:
    get_owned_job(db, job_id, current_user.id)
    interview = _get_interview(db, job_id, interview_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(interview, field, value)
    db.add(interview)
    db.commit()
    db.refresh(interview)
    return interview


@router.delete("/{job_id}/interviews/{interview_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_interview(
    job_id: int,
    interview_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    get_owned_job(db, job_id, current_user.id)
    interview = _get_interview(db, job_id, interview_id)
    db.delete(interview)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import relationship

from jobtracker.database import Base


class ApplicationStatus(str, enum.Enum):
    SAVED = "saved"
    APPLIED = "applied"
    INTERVIEWING = "interviewing"
    REJECTED = "rejected"
    OFFER = "offer"
    ACCEPTED = "accepted"


class JobApplication(Base):
    __tablename__ = "job_applications"
    __table_args__ = (
        Index("idx_job_user_status", "user_id", "status"),
        Index("idx_job_user_date_added", "user_id", "date_added"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(500), nullable=False)
    company = Column(String(255), nullable=False)
    location = Column(String(255))
    salary = Column(String(255))
    url = Column(String(2000), nullable=False)
    status = Column(String(50), default=ApplicationStatus.SAVED.value, nullable=False)
    date_added = Column(DateTime, default=datetime.utcnow, nullable=False)
    date_applied = Column(DateTime)
    notes = Column(Text)
    resume_version = Column(String(255))
    cover_letter_used = Column(Boolean)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="jobs")
    interviews = relationship(
        "Interview",
        back_populates="job_application",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Interview.date",
    )

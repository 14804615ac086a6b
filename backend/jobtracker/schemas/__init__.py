from jobtracker.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserOut
from jobtracker.schemas.interview import InterviewCreate, InterviewOut, InterviewUpdate
from jobtracker.schemas.job import JobCreate, JobOut, JobStatsOut, JobUpdate

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "UserOut",
    "AuthResponse",
    "JobCreate",
    "JobUpdate",
    "JobOut",
    "JobStatsOut",
    "InterviewCreate",
    "InterviewUpdate",
    "InterviewOut",
]

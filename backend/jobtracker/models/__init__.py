from jobtracker.models.interview import Interview, InterviewType
from jobtracker.models.job_application import ApplicationStatus, JobApplication
from jobtracker.models.user import User

__all__ = ["User", "JobApplication", "ApplicationStatus", "Interview", "InterviewType"]

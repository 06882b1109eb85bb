"""
Platform models for YouthConnect.

This package maps the platform tables read by recommendations, discovery and
analytics. The user table lives in core/auth/models.py.
"""

from .course import Course, CourseEnrollment
from .entrepreneurship import Entrepreneurship
from .enums import (
    ApplicationStatus,
    ApprovalStatus,
    BusinessStage,
    ContractType,
    CourseLevel,
    CourseStatus,
    EducationLevel,
    ExperienceLevel,
    InstitutionType,
    JobStatus,
    MessageContext,
    UserRole,
    WorkModality,
)
from .job import JobApplication, JobOffer
from .message import Message
from .organization import Company, Institution
from .profile import Profile

__all__ = [
    "ApplicationStatus",
    "ApprovalStatus",
    "BusinessStage",
    "Company",
    "ContractType",
    "Course",
    "CourseEnrollment",
    "CourseLevel",
    "CourseStatus",
    "EducationLevel",
    "Entrepreneurship",
    "ExperienceLevel",
    "Institution",
    "InstitutionType",
    "JobApplication",
    "JobOffer",
    "JobStatus",
    "Message",
    "MessageContext",
    "Profile",
    "UserRole",
    "WorkModality",
]

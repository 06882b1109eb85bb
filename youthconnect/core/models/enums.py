"""Enumerations shared by the platform tables and the scoring code."""

from enum import Enum


class UserRole(str, Enum):
    YOUTH = "YOUTH"
    COMPANIES = "COMPANIES"
    INSTITUTION = "INSTITUTION"
    SUPERADMIN = "SUPERADMIN"


class ApprovalStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class EducationLevel(str, Enum):
    HIGH_SCHOOL = "HIGH_SCHOOL"
    TECHNICAL = "TECHNICAL"
    BACHELOR = "BACHELOR"
    MASTER = "MASTER"
    PHD = "PHD"


class ExperienceLevel(str, Enum):
    NO_EXPERIENCE = "NO_EXPERIENCE"
    ENTRY_LEVEL = "ENTRY_LEVEL"
    MID_LEVEL = "MID_LEVEL"
    SENIOR_LEVEL = "SENIOR_LEVEL"


class WorkModality(str, Enum):
    ON_SITE = "ON_SITE"
    REMOTE = "REMOTE"
    HYBRID = "HYBRID"


class ContractType(str, Enum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    INTERNSHIP = "INTERNSHIP"
    VOLUNTEER = "VOLUNTEER"
    FREELANCE = "FREELANCE"


class InstitutionType(str, Enum):
    MUNICIPALITY = "MUNICIPALITY"
    NGO = "NGO"
    UNIVERSITY = "UNIVERSITY"
    TRAINING_CENTER = "TRAINING_CENTER"


class CourseLevel(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


class CourseStatus(str, Enum):
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"


class JobStatus(str, Enum):
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    CLOSED = "CLOSED"


class ApplicationStatus(str, Enum):
    SENT = "SENT"
    UNDER_REVIEW = "UNDER_REVIEW"
    PRE_SELECTED = "PRE_SELECTED"
    INTERVIEW_SCHEDULED = "INTERVIEW_SCHEDULED"
    REJECTED = "REJECTED"
    HIRED = "HIRED"


class MessageContext(str, Enum):
    GENERAL = "GENERAL"
    JOB_APPLICATION = "JOB_APPLICATION"
    ENTREPRENEURSHIP = "ENTREPRENEURSHIP"


class BusinessStage(str, Enum):
    IDEA = "IDEA"
    STARTUP = "STARTUP"
    GROWING = "GROWING"
    ESTABLISHED = "ESTABLISHED"


# Ordinal ranks used when comparing a candidate with a requirement.
EXPERIENCE_RANK = {
    ExperienceLevel.NO_EXPERIENCE: 0,
    ExperienceLevel.ENTRY_LEVEL: 1,
    ExperienceLevel.MID_LEVEL: 2,
    ExperienceLevel.SENIOR_LEVEL: 3,
}

EDUCATION_RANK = {
    EducationLevel.HIGH_SCHOOL: 0,
    EducationLevel.TECHNICAL: 1,
    EducationLevel.BACHELOR: 2,
    EducationLevel.MASTER: 3,
    EducationLevel.PHD: 4,
}

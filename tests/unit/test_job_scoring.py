"""Unit tests for job recommendation scoring."""

from datetime import timedelta

import pytest

from tests.shared.builders import NOW, make_job, make_profile
from youthconnect.core.models import (
    ContractType,
    EducationLevel,
    ExperienceLevel,
    WorkModality,
)
from youthconnect.core.recommendations.jobs import (
    contract_score,
    count_skill_matches,
    education_score,
    experience_score,
    location_score,
    match_percentage,
    modality_score,
    salary_score,
    score_job,
)


class TestComponentScores:
    """Test the per-requirement fit scores."""

    @pytest.mark.parametrize(
        "user, required, expected",
        [
            (ExperienceLevel.ENTRY_LEVEL, ExperienceLevel.ENTRY_LEVEL, 1.0),
            (ExperienceLevel.SENIOR_LEVEL, ExperienceLevel.ENTRY_LEVEL, 0.8),
            (ExperienceLevel.ENTRY_LEVEL, ExperienceLevel.MID_LEVEL, 0.7),
            (ExperienceLevel.NO_EXPERIENCE, ExperienceLevel.SENIOR_LEVEL, 0.3),
            (None, None, 1.0),
        ],
    )
    def test_experience_score(self, user, required, expected):
        assert experience_score(user, required) == pytest.approx(expected)

    @pytest.mark.parametrize(
        "user, required, expected",
        [
            (EducationLevel.BACHELOR, EducationLevel.BACHELOR, 1.0),
            (EducationLevel.PHD, EducationLevel.HIGH_SCHOOL, 0.9),
            (EducationLevel.TECHNICAL, EducationLevel.BACHELOR, 0.6),
            (EducationLevel.HIGH_SCHOOL, EducationLevel.BACHELOR, 0.2),
        ],
    )
    def test_education_score(self, user, required, expected):
        assert education_score(user, required) == pytest.approx(expected)

    @pytest.mark.parametrize(
        "user, job, expected",
        [
            (None, "La Paz", 0.5),
            ("La Paz, Bolivia", "la paz", 1.0),
            ("El Alto, La Paz", "Sopocachi, La Paz", 0.7),
            ("Cochabamba", "Remote", 0.8),
            ("Cochabamba", "Trabajo remoto", 0.8),
            ("Cochabamba", "Santa Cruz", 0.3),
        ],
    )
    def test_location_score(self, user, job, expected):
        assert location_score(user, job) == pytest.approx(expected)

    def test_modality_score(self):
        """Test that an unset preference counts as hybrid."""
        assert modality_score(None, WorkModality.HYBRID) == 1.0
        assert modality_score(WorkModality.REMOTE, WorkModality.HYBRID) == 0.7
        assert modality_score(WorkModality.REMOTE, WorkModality.ON_SITE) == 0.3

    def test_contract_score(self):
        """Test that an unset preference counts as full time."""
        assert contract_score(None, ContractType.FULL_TIME) == 1.0
        assert contract_score(None, ContractType.PART_TIME) == 0.6
        assert contract_score(ContractType.PART_TIME, ContractType.FULL_TIME) == 0.8
        assert contract_score(ContractType.INTERNSHIP, ContractType.FREELANCE) == 0.5

    def test_salary_score(self):
        assert salary_score(5000, 4000, 6000) == 1.0
        assert salary_score(3000, 4000, 6000) == pytest.approx(0.75)
        assert salary_score(9000, 4000, 6000) == pytest.approx(0.75)
        assert salary_score(100, 4000, 6000) == pytest.approx(0.3)

    def test_count_skill_matches_either_direction(self):
        """Test substring matching between user and job skills."""
        assert count_skill_matches(["Python", "react"], ["python 3", "React Native", "SQL"]) == 2
        assert count_skill_matches(["javascript"], ["java"]) == 1
        assert count_skill_matches([], ["python"]) == 0


class TestScoreJob:
    """Test the weighted job score."""

    def test_strong_match(self):
        """Test a profile that fits most requirements."""
        profile = make_profile(
            skills=["python", "sql"],
            experience_level=ExperienceLevel.ENTRY_LEVEL,
            education_level=EducationLevel.BACHELOR,
            city="La Paz",
            work_modality=WorkModality.ON_SITE,
            contract_type=ContractType.FULL_TIME,
            salary_expectation=5000,
        )
        job = make_job(
            skills_required=["python", "sql", "docker", "git"],
            education_level=EducationLevel.BACHELOR,
            location="La Paz, Bolivia",
            salary_min=4000,
            salary_max=6000,
            created_at=NOW - timedelta(days=2),
        )

        rec = score_job(profile, job, "Acme", now=NOW)

        # 20 skills + 20 experience + 15 education + 10 location
        # + 5 modality + 3 contract + 2 salary + 2 recency
        assert rec.score == pytest.approx(77.0)
        assert rec.reasons == [
            "2 matching skills",
            "Ideal experience level",
            "Meets the education requirement",
        ]
        assert rec.reason == "2 matching skills"
        assert rec.extra == {"company": "Acme"}
        assert match_percentage(rec) == 77

    def test_score_is_capped(self):
        """Test that the score stops at 100 while the raw score is kept."""
        profile = make_profile(
            skills=["python"],
            experience_level=ExperienceLevel.ENTRY_LEVEL,
            education_level=EducationLevel.HIGH_SCHOOL,
            city="La Paz",
            industry="tech",
            work_modality=WorkModality.ON_SITE,
            contract_type=ContractType.FULL_TIME,
            salary_expectation=5000,
        )
        job = make_job(
            skills_required=["python"],
            location="La Paz",
            salary_min=4000,
            salary_max=6000,
            created_at=NOW,
        )

        rec = score_job(profile, job, "Tech Bolivia", now=NOW)

        assert rec.score == 100.0
        assert rec.raw_score == pytest.approx(102.0)
        assert match_percentage(rec) == 102

    def test_empty_profile(self):
        """Test neutral defaults for a profile with nothing filled in."""
        rec = score_job(make_profile(), make_job(), now=NOW)

        # 14 experience + 15 education + 5 location + 3.5 modality + 3 contract
        assert rec.score == pytest.approx(40.5)
        assert rec.reasons == [
            "Meets the education requirement",
            "Preferred contract type",
        ]

    def test_salary_skipped_without_range(self):
        """Test that a salary expectation alone adds nothing."""
        profile = make_profile(salary_expectation=5000)
        with_range = score_job(profile, make_job(salary_min=4000, salary_max=6000), now=NOW)
        without_range = score_job(profile, make_job(), now=NOW)

        assert with_range.score - without_range.score == pytest.approx(2.0)

"""
Course recommendation scoring.

Every function here is pure: callers load courses and enrollment counts from
the database and pass them in.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..models.course import Course
from ..models.enums import CourseLevel, ExperienceLevel
from .base import Recommendation, normalize_terms, text_similarity, top, words

SKILL = "skill"
COLLABORATIVE = "collaborative"
CONTENT = "content"
TRENDING = "trending"

SOURCE_WEIGHTS: Dict[str, float] = {
    SKILL: 1.2,
    COLLABORATIVE: 1.0,
    CONTENT: 0.8,
    TRENDING: 0.6,
}

REASON_SKILLS = "Based on your skills ({matches} matches)"
REASON_POPULAR = "Very popular with students"
REASON_COMPREHENSIVE = "Comprehensive, in-depth content"
REASON_DEFAULT = "Recommended for you"
REASON_SIMILAR = "Similar to courses you are interested in"
REASON_TRENDING = "Enrollments are trending up"
REASON_MOST_POPULAR = "Popular with students"
REASON_COLLABORATIVE = "Students with similar interests also enrolled"
REASON_CONTENT = "Similar to courses you completed"


def target_course_level(experience: Optional[ExperienceLevel]) -> CourseLevel:
    """Course level that fits a candidate's experience."""
    if experience in (None, ExperienceLevel.NO_EXPERIENCE, ExperienceLevel.ENTRY_LEVEL):
        return CourseLevel.BEGINNER
    if experience == ExperienceLevel.MID_LEVEL:
        return CourseLevel.INTERMEDIATE
    return CourseLevel.ADVANCED


def count_tag_matches(tags: Optional[Iterable[str]], skills: Iterable[str]) -> int:
    """Number of course tags equal to one of the skills, ignoring case."""
    wanted = set(normalize_terms(skills))
    return sum(1 for tag in normalize_terms(tags) if tag in wanted)


def count_keyword_matches(text: Optional[str], skills: Iterable[str]) -> int:
    """Number of words in text that contain one of the skills."""
    wanted = normalize_terms(skills)
    if not wanted:
        return 0
    return sum(1 for word in words(text) if any(skill in word for skill in wanted))


def course_reason(skill_matches: int, enrollments: int, modules: int) -> str:
    if skill_matches > 0:
        return REASON_SKILLS.format(matches=skill_matches)
    if enrollments > 100:
        return REASON_POPULAR
    if modules > 5:
        return REASON_COMPREHENSIVE
    return REASON_DEFAULT


def personalized_course_score(
    course: Course,
    skills: Sequence[str],
    target_level: Optional[CourseLevel],
    enrollments: int,
) -> Recommendation:
    """
    Score a course against a student's skills and experience.

    10 points per tag equal to a skill, 5 when the level fits the student,
    up to 5 for popularity (0.1 per enrollment), up to 3 for depth (0.5 per
    module), 2 per title word and 1 per description word containing a skill.
    """
    modules = course.module_count or 0
    skill_matches = count_tag_matches(course.tags, skills)

    score = skill_matches * 10.0
    if target_level is not None and course.level == target_level:
        score += 5
    score += min(enrollments * 0.1, 5.0)
    score += min(modules * 0.5, 3.0)
    score += count_keyword_matches(course.title, skills) * 2
    score += count_keyword_matches(course.description, skills)

    return Recommendation(
        item=course,
        score=score,
        reason=course_reason(skill_matches, enrollments, modules),
        source=SKILL,
    )


def skill_course_score(course: Course, skills: Sequence[str]) -> Recommendation:
    """
    Score a course purely on skill overlap.

    Confidence is the share of the student's skills the course covers.
    """
    matches = count_tag_matches(course.tags, skills)
    similarity = text_similarity(
        " ".join(skills), f"{course.title} {course.description or ''}"
    )
    return Recommendation(
        item=course,
        score=matches * 10.0 + similarity * 5,
        reason=REASON_SKILLS.format(matches=matches),
        source=SKILL,
        confidence=min(matches / len(skills), 1.0) if skills else 0.0,
    )


def similar_course_score(target: Course, candidate: Course) -> Recommendation:
    """
    Score how closely a candidate course resembles a target course.

    10 for the same level, 8 for the same category, 5 per shared tag and 2
    per shared title word longer than three characters.
    """
    score = 0.0
    if candidate.level == target.level:
        score += 10
    if candidate.category and candidate.category == target.category:
        score += 8

    target_tags = set(normalize_terms(target.tags))
    common_tags = [t for t in normalize_terms(candidate.tags) if t in target_tags]
    score += len(common_tags) * 5

    target_words = {w for w in words(target.title) if len(w) > 3}
    common_words = {w for w in words(candidate.title) if len(w) > 3} & target_words
    score += len(common_words) * 2

    return Recommendation(
        item=candidate,
        score=score,
        reason=REASON_SIMILAR,
        source=CONTENT,
        confidence=min(score / 20, 1.0),
    )


def content_course_score(
    candidate: Course, completed: Sequence[Course]
) -> Recommendation:
    """
    Score a candidate against the courses a student already completed.

    Per completed course: 5 for the same level, 8 for the same category, 3
    per shared tag and twice the description similarity.
    """
    score = 0.0
    candidate_tags = set(normalize_terms(candidate.tags))
    for course in completed:
        if course.level == candidate.level:
            score += 5
        if course.category and course.category == candidate.category:
            score += 8
        score += len(candidate_tags & set(normalize_terms(course.tags))) * 3
        score += text_similarity(course.description, candidate.description) * 2

    return Recommendation(
        item=candidate,
        score=score,
        reason=REASON_CONTENT,
        source=CONTENT,
        confidence=min(score / 20, 1.0),
    )


def trending_score(recent_enrollments: int, total_enrollments: int) -> float:
    """Recent enrollments weighted by the share of all enrollments they are."""
    trend = recent_enrollments / max(total_enrollments, 1)
    return recent_enrollments * trend


def collaborative_scores(
    courses: Dict[object, Course],
    co_enrollments: Dict[object, int],
    similar_students: int,
) -> List[Recommendation]:
    """
    Score courses taken by students who share courses with the user.

    Args:
        courses: Candidate courses by ID
        co_enrollments: Number of similar students enrolled per course ID
        similar_students: Number of students sharing a course with the user
    """
    results = []
    for course_id, count in co_enrollments.items():
        course = courses.get(course_id)
        if course is None:
            continue
        results.append(
            Recommendation(
                item=course,
                score=float(count),
                reason=REASON_COLLABORATIVE,
                source=COLLABORATIVE,
                confidence=min(count / max(similar_students, 1), 1.0),
            )
        )
    return results


def combine_recommendations(
    groups: Iterable[Tuple[str, List[Recommendation]]], limit: int
) -> List[Recommendation]:
    """
    Merge recommendations from several sources into one ranking.

    Scores are multiplied by the source weight. A course recommended by more
    than one source sums its weighted scores, averages confidences and keeps
    the reason it was first recommended for.
    """
    merged: Dict[object, Recommendation] = {}
    for source, recommendations in groups:
        weight = SOURCE_WEIGHTS.get(source, 1.0)
        for rec in recommendations:
            key = rec.item.id
            weighted = rec.score * weight
            existing = merged.get(key)
            if existing is None:
                merged[key] = Recommendation(
                    item=rec.item,
                    score=weighted,
                    reason=rec.reason,
                    source=source,
                    confidence=rec.confidence,
                )
            else:
                existing.score += weighted
                existing.confidence = (existing.confidence + rec.confidence) / 2
    return top(list(merged.values()), limit)

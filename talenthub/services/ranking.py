"""
Course-affinity ordering for vacancy listings
"""
from typing import Iterable, List, Optional, Sequence, TypeVar

T = TypeVar("T")


def normalize_course(course: str) -> str:
    return course.strip().lower()


def score_vacancy_for_course(preferred_courses: Optional[Iterable[str]], normalized_course: str) -> int:
    """
    3 - exact match with a preferred course
    2 - one contains the other
    1 - a preferred course starts with the first word of the viewer's course
    0 - no affinity
    """
    preferred = [normalize_course(c) for c in preferred_courses or ()]
    if not preferred:
        return 0
    if normalized_course in preferred:
        return 3
    if any(normalized_course in course or course in normalized_course for course in preferred):
        return 2
    words = normalized_course.split()
    root = words[0] if words else normalized_course
    if any(course.startswith(root) for course in preferred):
        return 1
    return 0


def sort_vacancies_by_preference(
    vacancies: Sequence[T],
    course: Optional[str] = None,
    priority_ids: Iterable[str] = (),
) -> List[T]:
    """
    Priority ids first, then by course affinity. sorted() is stable, so
    vacancies that tie keep their incoming order (newest first from the query).
    """
    normalized_course = normalize_course(course) if course else None
    priority = set(priority_ids)

    def key(vacancy):
        tier = 0 if vacancy.id in priority else 1
        if not normalized_course:
            return (tier, 0)
        return (tier, -score_vacancy_for_course(vacancy.preferredCourses, normalized_course))

    return sorted(vacancies, key=key)

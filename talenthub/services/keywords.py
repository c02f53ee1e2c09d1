"""
Keyword derivation for vacancy search

Vacancies store a denormalized list of lowercase tokens so free-text search
can match on skills, courses, location and other structured fields.
"""
import re
from typing import Iterable, List, Optional

LIST_SEPARATORS = re.compile(r"[,;|/\\\n]+")
TOKEN_SEPARATORS = re.compile(r"[\s,;|/\\-]+")
MIN_TOKEN_LENGTH = 3


def normalize_string_list(values: Iterable[str]) -> List[str]:
    """Split packed entries ("python, sql"), trim, and drop empties and duplicates."""
    normalized = []
    seen = set()
    for value in values:
        for token in LIST_SEPARATORS.split(value):
            token = token.strip()
            if token and token not in seen:
                seen.add(token)
                normalized.append(token)
    return normalized


def normalize_keywords(values: Iterable[str]) -> List[str]:
    """Caller-supplied keywords, lowercased as given."""
    keywords = []
    for keyword in normalize_string_list(values):
        keyword = keyword.lower()
        if keyword not in keywords:
            keywords.append(keyword)
    return keywords


def compute_vacancy_keywords(
    title: str,
    description: str,
    modality: Optional[str] = None,
    seniority: Optional[str] = None,
    contractType: Optional[str] = None,
    locationCity: Optional[str] = None,
    locationState: Optional[str] = None,
    locationCountry: Optional[str] = None,
    companyName: Optional[str] = None,
    skills: Iterable[str] = (),
    preferredCourses: Iterable[str] = (),
    benefits: Optional[Iterable[str]] = None,
) -> List[str]:
    tokens: List[str] = []

    def push(value: Optional[str], split: bool = True):
        if not value:
            return
        value = value.strip()
        if not value:
            return
        if not split:
            candidates = [value]
        else:
            candidates = [t for t in TOKEN_SEPARATORS.split(value) if len(t) >= MIN_TOKEN_LENGTH]
        for candidate in candidates:
            candidate = candidate.lower()
            if candidate not in tokens:
                tokens.append(candidate)

    push(title, split=False)
    push(description)
    push(modality)
    push(seniority)
    push(contractType)
    push(locationCity)
    push(locationState)
    push(locationCountry)
    push(companyName, split=False)

    for skill in skills:
        push(skill, split=False)
    for course in preferredCourses:
        push(course, split=False)
    for benefit in benefits or ():
        push(benefit, split=False)

    return tokens

"""
Query-string parsing for the vacancy listing
"""
from typing import Mapping, Optional

from talenthub.schemas.vacancy import VacancyFilters

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}

STRING_FILTERS = (
    "status",
    "modality",
    "seniority",
    "contractType",
    "locationState",
    "locationCity",
    "course",
    "recruiterId",
    "minSalary",
    "maxSalary",
    "page",
    "pageSize",
)


def parse_boolean_param(value: Optional[str]) -> Optional[bool]:
    """Unrecognized tokens count as absent rather than invalid."""
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    return None


def normalize_vacancy_filters(params: Mapping[str, str]) -> VacancyFilters:
    """
    Build validated filters from raw query parameters.

    Raises pydantic.ValidationError when a recognized field is present but
    malformed (e.g. pageSize=500, minSalary=-1).
    """
    raw = {}
    for name in STRING_FILTERS:
        value = params.get(name)
        if value:
            raw[name] = value

    search = params.get("search") or params.get("q")
    if search:
        raw["search"] = search

    for name in ("mine", "includeDrafts"):
        flag = parse_boolean_param(params.get(name))
        if flag is not None:
            raw[name] = flag

    return VacancyFilters.model_validate(raw)

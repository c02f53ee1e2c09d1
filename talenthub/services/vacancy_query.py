"""
Vacancy listing predicates

build_vacancy_where() turns normalized filters and the viewer into a small
immutable predicate tree; compile_vacancy_where() renders that tree as a
SQLAlchemy clause over the Vacancy model. Keeping the two apart lets the
filtering rules be tested without a database.
"""
import json
from dataclasses import dataclass
from typing import Any, Iterable, Literal, Optional, Sequence, Tuple, Union

from sqlalchemy import String, and_, cast, false, func, or_, true
from sqlalchemy.dialects.postgresql import JSONB

from talenthub.core.auth import Viewer
from talenthub.models.vacancy import Vacancy, VacancyStatus
from talenthub.schemas.vacancy import VacancyFilters

AcceptedMode = Literal["default", "only", "exclude"]

CASE_INSENSITIVE_FIELDS = ("modality", "seniority", "contractType", "locationState", "locationCity")


@dataclass(frozen=True)
class Condition:
    """A single field test. op: eq, ieq, icontains, has, in, not_in, gte, lte"""
    field: str
    op: str
    value: Any


@dataclass(frozen=True)
class AnyOf:
    conditions: Tuple["Predicate", ...]


@dataclass(frozen=True)
class AllOf:
    conditions: Tuple["Predicate", ...]


Predicate = Union[Condition, AnyOf, AllOf]

MATCH_ALL = AllOf(())


@dataclass(frozen=True)
class _WhereAccumulator:
    required: Tuple[Predicate, ...] = ()
    alternatives: Tuple[Predicate, ...] = ()

    def and_(self, predicate: Predicate) -> "_WhereAccumulator":
        return _WhereAccumulator(self.required + (predicate,), self.alternatives)

    def or_(self, *predicates: Predicate) -> "_WhereAccumulator":
        return _WhereAccumulator(self.required, self.alternatives + predicates)

    def build(self) -> Predicate:
        conditions = self.required
        if self.alternatives:
            conditions = conditions + (AnyOf(self.alternatives),)
        if not conditions:
            return MATCH_ALL
        if len(conditions) == 1:
            return conditions[0]
        return AllOf(conditions)


def build_vacancy_where(
    filters: VacancyFilters,
    viewer: Optional[Viewer] = None,
    accepted_vacancy_ids: Sequence[str] = (),
    accepted_mode: AcceptedMode = "default",
) -> Predicate:
    accepted_ids = tuple(accepted_vacancy_ids)
    viewer_id = viewer.id if viewer else None
    where = _WhereAccumulator()

    if filters.mine and viewer_id:
        where = where.and_(Condition("recruiterId", "eq", viewer_id))
    elif filters.recruiterId:
        where = where.and_(Condition("recruiterId", "eq", filters.recruiterId))

    if not (filters.includeDrafts and filters.mine and viewer_id):
        where = where.and_(Condition("isDraft", "eq", False))

    if filters.status:
        where = where.and_(Condition("status", "eq", filters.status))
    elif not filters.mine:
        if accepted_mode == "only":
            # the accepted-only query is already scoped by id below
            pass
        elif accepted_mode == "default" and accepted_ids:
            where = where.and_(AnyOf((
                Condition("status", "eq", VacancyStatus.OPEN.value),
                Condition("id", "in", accepted_ids),
            )))
        else:
            where = where.and_(Condition("status", "eq", VacancyStatus.OPEN.value))

    for field in CASE_INSENSITIVE_FIELDS:
        value = getattr(filters, field)
        if value:
            where = where.and_(Condition(field, "ieq", value))

    if filters.course:
        course = filters.course.strip().lower()
        where = where.or_(
            Condition("preferredCourses", "has", course),
            Condition("keywords", "has", course),
        )

    # TODO: salary bounds and search terms are OR-ed with the course match; confirm with product before tightening to AND
    if filters.minSalary is not None:
        where = where.or_(Condition("salaryMin", "gte", filters.minSalary))
    if filters.maxSalary is not None:
        where = where.or_(Condition("salaryMax", "lte", filters.maxSalary))

    if filters.search:
        term = filters.search.strip()
        where = where.or_(
            Condition("title", "icontains", term),
            Condition("description", "icontains", term),
            Condition("skills", "has", term),
            Condition("keywords", "has", term),
        )

    if accepted_mode == "only":
        where = where.and_(Condition("id", "in", accepted_ids))
    elif accepted_mode == "exclude" and accepted_ids:
        where = where.and_(Condition("id", "not_in", accepted_ids))

    return where.build()


def _list_contains(column, value: str, dialect_name: str):
    if dialect_name == "postgresql":
        return cast(column, JSONB).contains([value])
    # JSON text of a string list: the quoted token only matches a whole element
    return cast(column, String).contains(json.dumps(value), autoescape=True)


def _compile_condition(condition: Condition, dialect_name: str):
    column = getattr(Vacancy, condition.field)
    op, value = condition.op, condition.value

    if op == "eq":
        return column == value
    if op == "ieq":
        return func.lower(column) == value.lower()
    if op == "icontains":
        return column.icontains(value, autoescape=True)
    if op == "has":
        return _list_contains(column, value, dialect_name)
    if op == "in":
        return column.in_(list(value)) if value else false()
    if op == "not_in":
        return column.not_in(list(value)) if value else true()
    if op == "gte":
        return column >= value
    if op == "lte":
        return column <= value
    raise ValueError(f"Unsupported predicate operator: {op}")


def compile_vacancy_where(predicate: Predicate, dialect_name: str = "postgresql"):
    """Render a predicate tree as a SQLAlchemy boolean clause."""
    if isinstance(predicate, Condition):
        return _compile_condition(predicate, dialect_name)
    parts = [compile_vacancy_where(p, dialect_name) for p in predicate.conditions]
    if isinstance(predicate, AnyOf):
        return or_(*parts) if parts else false()
    return and_(*parts) if parts else true()


def iter_conditions(predicate: Predicate) -> Iterable[Condition]:
    """Yield every leaf condition of a predicate tree."""
    if isinstance(predicate, Condition):
        yield predicate
        return
    for child in predicate.conditions:
        yield from iter_conditions(child)

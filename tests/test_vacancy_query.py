from talenthub.core.auth import Viewer
from talenthub.models import Vacancy
from talenthub.schemas.vacancy import VacancyFilters
from talenthub.services.vacancy_query import (
    MATCH_ALL,
    AllOf,
    AnyOf,
    Condition,
    build_vacancy_where,
    compile_vacancy_where,
    iter_conditions,
)

RECRUITER = Viewer(id="rec-1", userType="recrutador")
STUDENT = Viewer(id="stu-1", userType="aluno", course="Ciência da Computação")


def _conditions(predicate):
    return list(iter_conditions(predicate))


def test_public_listing_forces_published_open() -> None:
    for viewer in (None, STUDENT, RECRUITER):
        where = build_vacancy_where(VacancyFilters(), viewer)
        assert where == AllOf((Condition("isDraft", "eq", False), Condition("status", "eq", "OPEN")))


def test_drafts_only_for_own_listing() -> None:
    filters = VacancyFilters(mine=True, includeDrafts=True)
    where = build_vacancy_where(filters, RECRUITER)
    assert where == Condition("recruiterId", "eq", "rec-1")

    # without a viewer "mine" cannot be honoured
    anonymous = build_vacancy_where(filters, None)
    assert Condition("isDraft", "eq", False) in _conditions(anonymous)


def test_mine_without_drafts_skips_status_scoping() -> None:
    where = build_vacancy_where(VacancyFilters(mine=True), RECRUITER)
    assert where == AllOf((Condition("recruiterId", "eq", "rec-1"), Condition("isDraft", "eq", False)))


def test_recruiter_filter_and_explicit_status() -> None:
    where = build_vacancy_where(VacancyFilters(recruiterId="rec-9", status="CLOSED"), None)
    assert where == AllOf(
        (
            Condition("recruiterId", "eq", "rec-9"),
            Condition("isDraft", "eq", False),
            Condition("status", "eq", "CLOSED"),
        )
    )


def test_accepted_default_mode_keeps_closed_accepted_vacancies() -> None:
    where = build_vacancy_where(VacancyFilters(), STUDENT, ["v1", "v2"], "default")
    assert AnyOf((Condition("status", "eq", "OPEN"), Condition("id", "in", ("v1", "v2")))) in where.conditions


def test_accepted_only_mode_drops_status_and_scopes_ids() -> None:
    where = build_vacancy_where(VacancyFilters(), STUDENT, ["v1"], "only")
    conditions = _conditions(where)
    assert Condition("id", "in", ("v1",)) in conditions
    assert all(c.field != "status" for c in conditions)


def test_accepted_exclude_mode() -> None:
    where = build_vacancy_where(VacancyFilters(), STUDENT, ["v1"], "exclude")
    assert Condition("id", "not_in", ("v1",)) in _conditions(where)
    assert Condition("status", "eq", "OPEN") in _conditions(where)


def test_exact_match_filters_are_case_insensitive() -> None:
    where = build_vacancy_where(VacancyFilters(modality="Remote", locationCity="Recife"), None)
    conditions = _conditions(where)
    assert Condition("modality", "ieq", "Remote") in conditions
    assert Condition("locationCity", "ieq", "Recife") in conditions


def test_course_salary_and_search_share_one_or_group() -> None:
    filters = VacancyFilters(course=" Ciência da Computação ", minSalary=2000, maxSalary=8000, search="python")
    where = build_vacancy_where(filters, None)
    groups = [c for c in where.conditions if isinstance(c, AnyOf)]
    assert len(groups) == 1
    assert groups[0] == AnyOf(
        (
            Condition("preferredCourses", "has", "ciência da computação"),
            Condition("keywords", "has", "ciência da computação"),
            Condition("salaryMin", "gte", 2000),
            Condition("salaryMax", "lte", 8000),
            Condition("title", "icontains", "python"),
            Condition("description", "icontains", "python"),
            Condition("skills", "has", "python"),
            Condition("keywords", "has", "python"),
        )
    )
    assert where.conditions[-1] is groups[0]


def test_unconstrained_predicate_matches_everything(db, make_user, make_vacancy) -> None:
    recruiter = make_user("recrutador")
    make_vacancy(recruiter)
    make_vacancy(recruiter, isDraft=True)
    clause = compile_vacancy_where(MATCH_ALL, "sqlite")
    assert db.query(Vacancy).filter(clause).count() == 2


def test_compiled_where_runs_against_the_database(db, make_user, make_vacancy) -> None:
    recruiter = make_user("recrutador")
    python_job = make_vacancy(recruiter, title="Python Developer", skills=["Python"], keywords=["python"])
    make_vacancy(recruiter, title="Java Developer", skills=["Java"], keywords=["java"], description="Spring services")
    make_vacancy(recruiter, title="Python Draft", isDraft=True, keywords=["python"])
    make_vacancy(recruiter, title="Python Closed", status="CLOSED", keywords=["python"])

    where = build_vacancy_where(VacancyFilters(search="python"), None)
    rows = db.query(Vacancy).filter(compile_vacancy_where(where, "sqlite")).all()
    assert [v.id for v in rows] == [python_job.id]


def test_list_membership_matches_whole_elements_only(db, make_user, make_vacancy) -> None:
    recruiter = make_user("recrutador")
    make_vacancy(recruiter, keywords=["python developer"], skills=["Go"], title="Role", description="Nothing relevant")
    exact = make_vacancy(recruiter, keywords=["python"], skills=["Go"], title="Role", description="Nothing relevant")

    where = build_vacancy_where(VacancyFilters(search="python"), None)
    rows = db.query(Vacancy).filter(compile_vacancy_where(where, "sqlite")).all()
    assert [v.id for v in rows] == [exact.id]


def test_case_insensitive_modality_against_database(db, make_user, make_vacancy) -> None:
    recruiter = make_user("recrutador")
    remote = make_vacancy(recruiter, modality="Remote")
    make_vacancy(recruiter, modality="Hybrid")

    where = build_vacancy_where(VacancyFilters(modality="remote"), None)
    rows = db.query(Vacancy).filter(compile_vacancy_where(where, "sqlite")).all()
    assert [v.id for v in rows] == [remote.id]


def _matching_titles(db, filters) -> set:
    where = build_vacancy_where(filters, None)
    return {v.title for v in db.query(Vacancy).filter(compile_vacancy_where(where, "sqlite")).all()}


def test_salary_bounds_against_database(db, make_user, make_vacancy) -> None:
    recruiter = make_user("recrutador")
    make_vacancy(recruiter, title="Low", salaryMin=1500, salaryMax=2500)
    make_vacancy(recruiter, title="High", salaryMin=6000, salaryMax=9000)
    make_vacancy(recruiter, title="Unpaid")

    assert _matching_titles(db, VacancyFilters(minSalary=5000)) == {"High"}
    assert _matching_titles(db, VacancyFilters(maxSalary=3000)) == {"Low"}
    # both bounds join the same OR group
    assert _matching_titles(db, VacancyFilters(minSalary=5000, maxSalary=3000)) == {"Low", "High"}


def test_accented_course_matches_whole_list_elements(db, make_user, make_vacancy) -> None:
    recruiter = make_user("recrutador")
    make_vacancy(recruiter, title="By keyword", preferredCourses=["Outro"], keywords=["ciência da computação"])
    make_vacancy(recruiter, title="By course", preferredCourses=["ciência da computação"], keywords=["java"])
    make_vacancy(recruiter, title="Partial", preferredCourses=["Ciência"], keywords=["ciência"])
    make_vacancy(recruiter, title="Other", preferredCourses=["Direito"], keywords=["direito"])

    assert _matching_titles(db, VacancyFilters(course="Ciência da Computação")) == {"By keyword", "By course"}

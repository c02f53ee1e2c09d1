from types import SimpleNamespace

from talenthub.services.ranking import score_vacancy_for_course, sort_vacancies_by_preference


def _vacancy(vacancy_id: str, *courses: str) -> SimpleNamespace:
    return SimpleNamespace(id=vacancy_id, preferredCourses=list(courses))


def test_scores() -> None:
    assert score_vacancy_for_course(["Ciência da Computação"], "ciência da computação") == 3
    assert score_vacancy_for_course(["Computação"], "ciência da computação") == 2
    assert score_vacancy_for_course(["Engenharia Civil"], "engenharia de software") == 1
    assert score_vacancy_for_course(["Direito"], "medicina") == 0
    assert score_vacancy_for_course([], "medicina") == 0
    assert score_vacancy_for_course(None, "medicina") == 0


def test_course_ties_keep_incoming_order() -> None:
    a, b, c = _vacancy("A", "X"), _vacancy("B", "Y"), _vacancy("C", "X")
    ordered = sort_vacancies_by_preference([a, b, c], "X")
    assert [v.id for v in ordered] == ["A", "C", "B"]


def test_without_course_order_is_unchanged() -> None:
    items = [_vacancy("A", "Y"), _vacancy("B", "X"), _vacancy("C", "Z")]
    assert [v.id for v in sort_vacancies_by_preference(items)] == ["A", "B", "C"]
    assert [v.id for v in sort_vacancies_by_preference(items, "   ")] == ["A", "B", "C"]


def test_priority_ids_come_first() -> None:
    items = [_vacancy("A", "X"), _vacancy("B", "Y"), _vacancy("C", "X")]
    ordered = sort_vacancies_by_preference(items, "X", priority_ids=["B"])
    assert [v.id for v in ordered] == ["B", "A", "C"]


def test_input_is_not_mutated() -> None:
    items = [_vacancy("A", "Y"), _vacancy("B", "X")]
    sort_vacancies_by_preference(items, "X")
    assert [v.id for v in items] == ["A", "B"]

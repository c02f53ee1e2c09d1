"""
Vacancy Service
Listing, detail, creation and update of job vacancies
"""
import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, Mapping, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from talenthub.core.auth import Viewer
from talenthub.core.errors import BadRequestError, ForbiddenError, NotFoundError
from talenthub.models.application import ApplicationStatus, VacancyApplication
from talenthub.models.user import User, UserType
from talenthub.models.vacancy import Vacancy, VacancyStatus
from talenthub.schemas.application import ApplicationResponse
from talenthub.schemas.vacancy import (
    VacancyCreate, VacancyCreatedResponse, VacancyDetail, VacancyDetailResponse,
    VacancyListItem, VacancyListResponse, VacancyPermissions, VacancyResponse,
    VacancyUpdate, ViewerApplicationState, ViewerState
)
from talenthub.services.keywords import compute_vacancy_keywords, normalize_keywords, normalize_string_list
from talenthub.services.notification_service import notification_service
from talenthub.services.projection import (
    VacancyProjection, can_apply_to_vacancy, can_user_apply, is_vacancy_owner,
    project_vacancy_for_viewer
)
from talenthub.services.ranking import sort_vacancies_by_preference
from talenthub.services.vacancy_filters import normalize_vacancy_filters
from talenthub.services.vacancy_query import build_vacancy_where, compile_vacancy_where

logger = logging.getLogger(__name__)

KEYWORD_SOURCES = ("keywords", "skills", "preferredCourses", "title", "description")


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _upper(value: Optional[str]) -> Optional[str]:
    return value.upper() if value else None


def _url(value) -> Optional[str]:
    return str(value) if value is not None else None


def ensure_recruiter_user(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise ForbiddenError("User not found; cannot create vacancy")
    if user.userType != UserType.RECRUITER.value:
        raise ForbiddenError("Only recruiters can create vacancies")
    return user


def map_vacancy_create_data(payload: VacancyCreate, recruiter_id: str) -> dict:
    """Column values for a new vacancy"""
    skills = normalize_string_list(payload.skills)
    courses = normalize_string_list(payload.preferredCourses)
    benefits = payload.benefits or []

    keywords = normalize_keywords(payload.keywords or [])
    if not keywords:
        keywords = compute_vacancy_keywords(
            title=payload.title,
            description=payload.description,
            modality=payload.modality,
            seniority=payload.seniority,
            contractType=payload.contractType,
            locationCity=payload.locationCity,
            locationState=payload.locationState,
            locationCountry=payload.locationCountry,
            companyName=payload.companyName,
            skills=skills,
            preferredCourses=courses,
            benefits=benefits,
        )

    return {
        "title": payload.title,
        "description": payload.description,
        "skills": skills,
        "preferredCourses": courses,
        "keywords": keywords,
        "modality": payload.modality,
        "seniority": payload.seniority,
        "contractType": payload.contractType,
        "workload": payload.workload,
        "salaryMin": payload.salaryMin,
        "salaryMax": payload.salaryMax,
        "salaryCurrency": _upper(payload.salaryCurrency),
        "benefits": benefits,
        "deadline": _naive_utc(payload.deadline),
        "locationCity": payload.locationCity,
        "locationState": payload.locationState,
        "locationCountry": payload.locationCountry,
        "companyName": payload.companyName,
        "contactEmail": payload.contactEmail.lower(),
        "contactPhone": payload.contactPhone,
        "contactUrl": _url(payload.contactUrl),
        "contactNotes": payload.contactNotes,
        "status": payload.status or VacancyStatus.OPEN.value,
        "isDraft": bool(payload.isDraft),
        "recruiterId": recruiter_id,
    }


def map_vacancy_update_data(payload: VacancyUpdate, current: Vacancy) -> dict:
    """Column values changed by a partial update; keywords follow their sources"""
    sent = payload.model_fields_set
    data = {}

    for name in ("title", "description", "modality", "seniority", "contractType",
                 "workload", "salaryMin", "salaryMax", "locationCity", "locationState",
                 "locationCountry", "companyName", "contactPhone", "contactNotes",
                 "status", "isDraft"):
        if name in sent:
            data[name] = getattr(payload, name)

    if "salaryCurrency" in sent:
        data["salaryCurrency"] = _upper(payload.salaryCurrency)
    if "deadline" in sent:
        data["deadline"] = _naive_utc(payload.deadline)
    if "contactEmail" in sent:
        data["contactEmail"] = payload.contactEmail.lower()
    if "contactUrl" in sent:
        data["contactUrl"] = _url(payload.contactUrl)
    if "skills" in sent:
        data["skills"] = normalize_string_list(payload.skills)
    if "preferredCourses" in sent:
        data["preferredCourses"] = normalize_string_list(payload.preferredCourses)
    if "benefits" in sent:
        data["benefits"] = payload.benefits or []

    if any(name in sent for name in KEYWORD_SOURCES):
        def merged(name):
            value = data.get(name)
            return value if value is not None else getattr(current, name)

        keywords = normalize_keywords(payload.keywords or [])
        if not keywords:
            keywords = compute_vacancy_keywords(
                title=merged("title"),
                description=merged("description"),
                modality=merged("modality"),
                seniority=merged("seniority"),
                contractType=merged("contractType"),
                locationCity=merged("locationCity"),
                locationState=merged("locationState"),
                locationCountry=merged("locationCountry"),
                companyName=merged("companyName"),
                skills=merged("skills") or [],
                preferredCourses=merged("preferredCourses") or [],
                benefits=merged("benefits") or [],
            )
        data["keywords"] = keywords

    return data


def _application_counts(db: Session, vacancy_ids: Iterable[str]) -> Dict[str, int]:
    ids = list(vacancy_ids)
    if not ids:
        return {}
    rows = db.query(
        VacancyApplication.vacancyId,
        func.count(VacancyApplication.id)
    ).filter(
        VacancyApplication.vacancyId.in_(ids)
    ).group_by(VacancyApplication.vacancyId).all()
    return {vacancy_id: count for vacancy_id, count in rows}


def build_detail_response(projection: VacancyProjection) -> VacancyDetailResponse:
    vacancy = projection.vacancy
    applications = [ApplicationResponse.model_validate(a) for a in projection.applications]
    base = VacancyResponse.model_validate(vacancy).model_dump()
    base["applicationCount"] = len(vacancy.applications)
    return VacancyDetailResponse(
        vacancy=VacancyDetail(**base, applications=applications),
        applications=applications,
        permissions=VacancyPermissions(
            canEdit=projection.permissions.canEdit,
            canApply=projection.permissions.canApply,
            canManageApplications=projection.permissions.canManageApplications,
        ),
    )


class VacancyService:
    """Read and write paths for vacancies"""

    def list_vacancies(
        self,
        db: Session,
        params: Mapping[str, str],
        viewer: Optional[Viewer] = None
    ) -> VacancyListResponse:
        """
        List vacancies visible to the viewer.

        Candidates see the vacancies they were accepted into first, even when
        those are closed; the rest follow ordered by course affinity.
        """
        filters = normalize_vacancy_filters(params)
        dialect = db.get_bind().dialect.name

        show_accepted = can_user_apply(viewer) and not filters.mine
        accepted_ids = []
        if show_accepted:
            rows = db.query(VacancyApplication.vacancyId).filter(
                VacancyApplication.applicantId == viewer.id,
                VacancyApplication.status == ApplicationStatus.ACCEPTED.value
            ).all()
            accepted_ids = [vacancy_id for (vacancy_id,) in rows]

        general_mode = "exclude" if show_accepted and accepted_ids else "default"
        where = compile_vacancy_where(
            build_vacancy_where(filters, viewer, accepted_ids, general_mode), dialect
        )

        skip = (filters.page - 1) * filters.pageSize
        take = filters.page * filters.pageSize

        general_total = db.query(Vacancy).filter(where).count()
        general_items = db.query(Vacancy).filter(where).order_by(
            Vacancy.createdAt.desc()
        ).limit(take).all()

        accepted_items = []
        if show_accepted and accepted_ids:
            accepted_where = compile_vacancy_where(
                build_vacancy_where(filters, viewer, accepted_ids, "only"), dialect
            )
            accepted_items = db.query(Vacancy).filter(accepted_where).order_by(
                Vacancy.createdAt.desc()
            ).all()

        accepted_set = {vacancy.id for vacancy in accepted_items}
        combined = accepted_items + [v for v in general_items if v.id not in accepted_set]
        course = filters.course or (viewer.course if viewer else None)
        ordered = sort_vacancies_by_preference(combined, course, accepted_set)
        page_items = ordered[skip:skip + filters.pageSize]
        total = general_total + len(accepted_items)

        viewer_applications = {}
        if viewer and page_items:
            own = db.query(VacancyApplication).filter(
                VacancyApplication.applicantId == viewer.id,
                VacancyApplication.vacancyId.in_([v.id for v in page_items])
            ).all()
            viewer_applications = {
                a.vacancyId: ViewerApplicationState(id=a.id, status=a.status) for a in own
            }

        counts = _application_counts(db, [v.id for v in page_items])
        items = []
        for vacancy in page_items:
            viewer_state = None
            if viewer:
                viewer_state = ViewerState(
                    canEdit=is_vacancy_owner(vacancy, viewer),
                    canApply=can_apply_to_vacancy(vacancy, viewer),
                    application=viewer_applications.get(vacancy.id),
                )
            items.append(VacancyListItem.model_validate(vacancy).model_copy(update={
                "applicationCount": counts.get(vacancy.id, 0),
                "viewerState": viewer_state,
            }))

        return VacancyListResponse(
            items=items,
            total=total,
            page=filters.page,
            pageSize=filters.pageSize,
            hasMore=skip + filters.pageSize < total,
            filters=filters,
        )

    def get_vacancy(self, db: Session, vacancy_id: str, viewer: Optional[Viewer] = None) -> VacancyDetailResponse:
        vacancy = db.query(Vacancy).filter(Vacancy.id == vacancy_id).first()
        if not vacancy:
            raise NotFoundError("Vacancy not found")

        if vacancy.isDraft and not is_vacancy_owner(vacancy, viewer):
            raise ForbiddenError("You do not have access to this vacancy")

        return build_detail_response(project_vacancy_for_viewer(vacancy, viewer))

    def create_vacancy(self, db: Session, payload: VacancyCreate, user_id: str) -> VacancyCreatedResponse:
        ensure_recruiter_user(db, user_id)

        vacancy = Vacancy(**map_vacancy_create_data(payload, user_id))
        db.add(vacancy)
        db.flush()

        if not vacancy.isDraft and vacancy.status == VacancyStatus.OPEN.value:
            notification_service.notify_vacancy_published(db, vacancy)

        db.commit()
        db.refresh(vacancy)
        logger.info("vacancy %s created by recruiter %s (draft=%s)", vacancy.id, user_id, vacancy.isDraft)

        return VacancyCreatedResponse(vacancy=VacancyResponse.model_validate(vacancy))

    def update_vacancy(
        self,
        db: Session,
        vacancy_id: str,
        payload: VacancyUpdate,
        user_id: str
    ) -> VacancyDetailResponse:
        if not payload.model_fields_set:
            raise BadRequestError("No changes provided")

        vacancy = db.query(Vacancy).filter(Vacancy.id == vacancy_id).first()
        if not vacancy:
            raise NotFoundError("Vacancy not found")

        if vacancy.recruiterId != user_id:
            raise ForbiddenError("Only the vacancy owner can edit it")

        data = map_vacancy_update_data(payload, vacancy)

        salary_min = data.get("salaryMin", vacancy.salaryMin)
        salary_max = data.get("salaryMax", vacancy.salaryMax)
        if salary_min is not None and salary_max is not None and salary_max < salary_min:
            raise BadRequestError("salaryMax must not be lower than salaryMin")

        if "status" in data and data["status"] != vacancy.status:
            data["closedAt"] = datetime.utcnow() if data["status"] == VacancyStatus.CLOSED.value else None

        for field, value in data.items():
            setattr(vacancy, field, value)

        db.commit()
        db.refresh(vacancy)
        logger.info("vacancy %s updated fields=%s", vacancy.id, sorted(data))

        owner = Viewer(id=user_id, userType=UserType.RECRUITER.value)
        return build_detail_response(project_vacancy_for_viewer(vacancy, owner))


vacancy_service = VacancyService()

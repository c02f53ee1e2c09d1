"""
Vacancy API Endpoints
Recruiters publish and manage vacancies; students and managers browse and apply
"""
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from talenthub.core.auth import AuthenticatedUser, Viewer, get_current_user, get_optional_viewer
from talenthub.core.database import get_db
from talenthub.schemas.application import (
    ApplicationCreate, ApplicationCreatedResponse, ApplicationDecision,
    ApplicationDecisionResponse, DecisionResult
)
from talenthub.schemas.vacancy import (
    VacancyCreate, VacancyCreatedResponse, VacancyDetailResponse,
    VacancyListResponse, VacancyUpdate
)
from talenthub.services.application_workflow import application_workflow
from talenthub.services.vacancy_service import vacancy_service

router = APIRouter(prefix="/vacancies", tags=["Vacancies"])


async def read_application_payload(request: Request) -> ApplicationCreate:
    """Application material is optional; an empty or unreadable body counts as none"""
    try:
        body = await request.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    return ApplicationCreate.model_validate(body)


# ============== PUBLIC LISTING ==============

@router.get("", response_model=VacancyListResponse)
def list_vacancies(
    request: Request,
    viewer: Optional[Viewer] = Depends(get_optional_viewer),
    db: Session = Depends(get_db)
):
    """
    List vacancies with filters and pagination

    Query: status, modality, seniority, contractType, locationState,
    locationCity, course, search (or q), recruiterId, minSalary, maxSalary,
    mine, includeDrafts, page, pageSize
    """
    return vacancy_service.list_vacancies(db, request.query_params, viewer)


@router.get("/{vacancy_id}", response_model=VacancyDetailResponse)
def get_vacancy(
    vacancy_id: str,
    viewer: Optional[Viewer] = Depends(get_optional_viewer),
    db: Session = Depends(get_db)
):
    """Get a vacancy; applications are limited to what the viewer may see"""
    return vacancy_service.get_vacancy(db, vacancy_id, viewer)


# ============== RECRUITER ENDPOINTS ==============

@router.post("", response_model=VacancyCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_vacancy(
    payload: VacancyCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a vacancy (recruiters only). Published vacancies notify candidates."""
    return vacancy_service.create_vacancy(db, payload, user.id)


@router.patch("/{vacancy_id}", response_model=VacancyDetailResponse)
def update_vacancy(
    vacancy_id: str,
    payload: VacancyUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Partially update a vacancy; closing it stamps closedAt"""
    return vacancy_service.update_vacancy(db, vacancy_id, payload, user.id)


@router.patch(
    "/{vacancy_id}/applications/{application_id}",
    response_model=ApplicationDecisionResponse
)
def decide_application(
    vacancy_id: str,
    application_id: str,
    decision: ApplicationDecision,
    user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Accept or reject an application (vacancy owner only)"""
    application = application_workflow.decide(db, vacancy_id, application_id, user.id, decision)
    return ApplicationDecisionResponse(application=DecisionResult.model_validate(application))


# ============== CANDIDATE ENDPOINTS ==============

@router.post("/{vacancy_id}/apply", response_model=ApplicationCreatedResponse)
def apply_to_vacancy(
    vacancy_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    payload: ApplicationCreate = Depends(read_application_payload),
    db: Session = Depends(get_db)
):
    """Apply to an open vacancy (students and managers)"""
    application = application_workflow.apply(db, vacancy_id, user.id, payload)
    return ApplicationCreatedResponse(applicationId=application.id)

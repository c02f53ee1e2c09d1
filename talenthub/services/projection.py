"""
What a given viewer is allowed to see and do on a vacancy
"""
from dataclasses import dataclass, field
from typing import Any, List, Optional

from talenthub.core.auth import Viewer
from talenthub.models.user import UserType
from talenthub.models.vacancy import VacancyStatus

APPLICANT_TYPES = (UserType.STUDENT.value, UserType.MANAGER.value)


@dataclass
class ViewerPermissions:
    canEdit: bool = False
    canApply: bool = False
    canManageApplications: bool = False


@dataclass
class VacancyProjection:
    vacancy: Any
    applications: List[Any] = field(default_factory=list)
    permissions: ViewerPermissions = field(default_factory=ViewerPermissions)


def can_user_apply(viewer: Optional[Viewer]) -> bool:
    """Only students and managers may apply to vacancies."""
    if viewer is None:
        return False
    return viewer.userType in APPLICANT_TYPES


def is_vacancy_owner(vacancy, viewer: Optional[Viewer]) -> bool:
    return viewer is not None and viewer.id == vacancy.recruiterId


def can_apply_to_vacancy(vacancy, viewer: Optional[Viewer]) -> bool:
    return (
        not vacancy.isDraft
        and vacancy.status == VacancyStatus.OPEN.value
        and can_user_apply(viewer)
    )


def project_vacancy_for_viewer(vacancy, viewer: Optional[Viewer] = None) -> VacancyProjection:
    """
    Owners see every application; anyone else sees only their own.
    The vacancy's relationship list is left untouched.
    """
    is_owner = is_vacancy_owner(vacancy, viewer)
    if is_owner:
        applications = list(vacancy.applications)
    elif viewer is not None:
        applications = [a for a in vacancy.applications if a.applicantId == viewer.id]
    else:
        applications = []

    return VacancyProjection(
        vacancy=vacancy,
        applications=applications,
        permissions=ViewerPermissions(
            canEdit=is_owner,
            canApply=can_apply_to_vacancy(vacancy, viewer),
            canManageApplications=is_owner,
        ),
    )

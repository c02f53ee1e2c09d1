"""
Application Workflow
Candidates apply to open vacancies; the owning recruiter accepts or rejects.

    none -> PENDING -> ACCEPTED | REJECTED
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from talenthub.core.errors import ConflictError, ForbiddenError, NotFoundError
from talenthub.models.application import ApplicationStatus, VacancyApplication
from talenthub.models.user import User
from talenthub.models.vacancy import Vacancy, VacancyStatus
from talenthub.schemas.application import ApplicationCreate, ApplicationDecision
from talenthub.services.notification_service import notification_service
from talenthub.services.projection import APPLICANT_TYPES

logger = logging.getLogger(__name__)


class ApplicationWorkflow:
    """Enforces who may apply and who may decide"""

    def apply(
        self,
        db: Session,
        vacancy_id: str,
        user_id: str,
        payload: Optional[ApplicationCreate] = None
    ) -> VacancyApplication:
        """
        Register a PENDING application and notify the vacancy owner.

        Raises NotFoundError, ForbiddenError or ConflictError when the
        candidate or the vacancy is not eligible.
        """
        payload = payload or ApplicationCreate()

        applicant = db.query(User).filter(User.id == user_id).first()
        if not applicant:
            raise NotFoundError("User not found")

        if applicant.userType not in APPLICANT_TYPES:
            raise ForbiddenError("Only students or managers can apply to vacancies")

        vacancy = db.query(Vacancy).filter(Vacancy.id == vacancy_id).first()
        if not vacancy or vacancy.isDraft:
            raise NotFoundError("Vacancy not found")

        if vacancy.status != VacancyStatus.OPEN.value:
            raise ForbiddenError("This vacancy is not accepting applications")

        if vacancy.recruiterId == applicant.id:
            raise ForbiddenError("The vacancy owner cannot apply to it")

        existing = db.query(VacancyApplication).filter(
            VacancyApplication.vacancyId == vacancy_id,
            VacancyApplication.applicantId == applicant.id
        ).first()
        if existing:
            raise ConflictError("You have already applied to this vacancy")

        application = VacancyApplication(
            vacancyId=vacancy_id,
            applicantId=applicant.id,
            coverLetter=payload.coverLetter,
            resumeUrl=str(payload.resumeUrl) if payload.resumeUrl else None,
            portfolioUrl=str(payload.portfolioUrl) if payload.portfolioUrl else None,
            additionalInfo=payload.additionalInfo,
            status=ApplicationStatus.PENDING.value,
        )
        db.add(application)

        notification_service.create(
            db,
            vacancy.recruiterId,
            title="New application received",
            message=f'{applicant.name or "A candidate"} applied to the vacancy "{vacancy.title}".',
        )

        try:
            db.commit()
        except IntegrityError:
            # a concurrent request won the unique (vacancy, applicant) race
            db.rollback()
            raise ConflictError("You have already applied to this vacancy")

        db.refresh(application)
        logger.info("application %s created for vacancy %s by %s", application.id, vacancy_id, applicant.id)
        return application

    def decide(
        self,
        db: Session,
        vacancy_id: str,
        application_id: str,
        user_id: str,
        decision: ApplicationDecision
    ) -> VacancyApplication:
        """
        Accept or reject an application and notify the candidate.

        A decided application can be decided again; the latest decision wins.
        """
        vacancy = db.query(Vacancy).filter(Vacancy.id == vacancy_id).first()
        if not vacancy:
            raise NotFoundError("Vacancy not found")

        if vacancy.recruiterId != user_id:
            raise ForbiddenError("Only the vacancy owner can manage its applications")

        application = db.query(VacancyApplication).filter(
            VacancyApplication.id == application_id
        ).first()
        if not application or application.vacancyId != vacancy_id:
            raise NotFoundError("Application not found for this vacancy")

        application.status = decision.status
        application.decisionNote = decision.note or None
        application.decidedAt = datetime.utcnow()
        application.decidedById = user_id

        if decision.status == ApplicationStatus.ACCEPTED.value:
            title = "Application accepted"
            message = f'Congratulations! Your application to "{vacancy.title}" was accepted.'
        else:
            title = "Application update"
            message = f'Your application to "{vacancy.title}" was closed. Thank you for your interest.'
        if decision.note:
            message = f"{message} Note: {decision.note}"

        notification_service.create(db, application.applicantId, title=title, message=message)

        db.commit()
        db.refresh(application)
        logger.info("application %s %s by %s", application.id, decision.status, user_id)
        return application


application_workflow = ApplicationWorkflow()

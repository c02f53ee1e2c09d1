"""
Vacancy application database model
One application per (vacancy, applicant) pair
"""
import uuid
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from talenthub.core.database import Base
import enum


class ApplicationStatus(str, enum.Enum):
    PENDING = "PENDING"    # Just applied
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


class VacancyApplication(Base):
    __tablename__ = "vacancy_applications"
    __table_args__ = (
        UniqueConstraint("vacancyId", "applicantId", name="uq_vacancy_applicant"),
    )

    id = Column(String(50), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    vacancyId = Column(String(50), ForeignKey("vacancies.id"), nullable=False, index=True)
    applicantId = Column(String(50), ForeignKey("users.id"), nullable=False, index=True)

    coverLetter = Column(Text, nullable=True)
    resumeUrl = Column(Text, nullable=True)
    portfolioUrl = Column(Text, nullable=True)
    additionalInfo = Column(Text, nullable=True)

    status = Column(String(20), nullable=False, default=ApplicationStatus.PENDING.value)
    decisionNote = Column(Text, nullable=True)
    decidedAt = Column(DateTime, nullable=True)
    decidedById = Column(String(50), ForeignKey("users.id"), nullable=True)

    appliedAt = Column(DateTime, default=datetime.utcnow)

    # Relationships
    vacancy = relationship("Vacancy", back_populates="applications")
    applicant = relationship("User", foreign_keys=[applicantId])
    decidedBy = relationship("User", foreign_keys=[decidedById])

    def __repr__(self):
        return f"<VacancyApplication {self.applicantId} for Vacancy #{self.vacancyId}>"

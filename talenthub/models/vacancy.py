"""
Job vacancy database model
"""
import uuid
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from talenthub.core.database import Base
import enum


class VacancyStatus(str, enum.Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class Vacancy(Base):
    __tablename__ = "vacancies"

    id = Column(String(50), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)

    # String lists (JSON arrays so they work on PostgreSQL and SQLite)
    skills = Column(JSON, nullable=False, default=list)
    preferredCourses = Column(JSON, nullable=False, default=list)
    keywords = Column(JSON, nullable=False, default=list)  # lowercase search tokens
    benefits = Column(JSON, nullable=False, default=list)

    modality = Column(String(50), nullable=False)  # Remote, Hybrid, On-site
    seniority = Column(String(50), nullable=False)
    contractType = Column(String(50), nullable=False)
    workload = Column(String(100), nullable=True)

    salaryMin = Column(Integer, nullable=True)
    salaryMax = Column(Integer, nullable=True)
    salaryCurrency = Column(String(3), nullable=True)

    deadline = Column(DateTime, nullable=True)
    locationCity = Column(String(100), nullable=True)
    locationState = Column(String(100), nullable=True)
    locationCountry = Column(String(100), nullable=True)
    companyName = Column(String(120), nullable=True)  # Overrides the recruiter's company

    contactEmail = Column(String(200), nullable=False)
    contactPhone = Column(String(50), nullable=True)
    contactUrl = Column(String(500), nullable=True)
    contactNotes = Column(Text, nullable=True)

    status = Column(String(20), nullable=False, default=VacancyStatus.OPEN.value, index=True)
    isDraft = Column(Boolean, nullable=False, default=False)

    recruiterId = Column(String(50), ForeignKey("users.id"), nullable=False, index=True)

    createdAt = Column(DateTime, default=datetime.utcnow)
    updatedAt = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    closedAt = Column(DateTime, nullable=True)

    # Relationships
    recruiter = relationship("User", back_populates="vacancies")
    applications = relationship(
        "VacancyApplication",
        back_populates="vacancy",
        order_by="VacancyApplication.appliedAt.desc()",
    )

    def __repr__(self):
        return f"<Vacancy {self.title} ({self.status})>"

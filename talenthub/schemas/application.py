"""
Pydantic schemas for vacancy applications
"""
from pydantic import AnyHttpUrl, BaseModel, Field
from typing import Literal, Optional
from datetime import datetime


class ApplicationCreate(BaseModel):
    """Optional material sent with a candidacy"""
    coverLetter: Optional[str] = Field(None, max_length=2000)
    resumeUrl: Optional[AnyHttpUrl] = None
    portfolioUrl: Optional[AnyHttpUrl] = None
    additionalInfo: Optional[str] = Field(None, max_length=2000)

    class Config:
        str_strip_whitespace = True


class ApplicationDecision(BaseModel):
    status: Literal["ACCEPTED", "REJECTED"]
    note: Optional[str] = Field(None, max_length=2000)

    class Config:
        str_strip_whitespace = True


class ApplicantSummary(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    course: Optional[str] = None

    class Config:
        from_attributes = True


class ApplicationResponse(BaseModel):
    id: str
    vacancyId: str
    applicantId: str
    status: str
    coverLetter: Optional[str] = None
    resumeUrl: Optional[str] = None
    portfolioUrl: Optional[str] = None
    additionalInfo: Optional[str] = None
    decisionNote: Optional[str] = None
    decidedAt: Optional[datetime] = None
    decidedById: Optional[str] = None
    appliedAt: Optional[datetime] = None
    applicant: Optional[ApplicantSummary] = None

    class Config:
        from_attributes = True


class ApplicationCreatedResponse(BaseModel):
    applicationId: str


class DecisionResult(BaseModel):
    id: str
    status: str
    decisionNote: Optional[str] = None
    decidedAt: Optional[datetime] = None

    class Config:
        from_attributes = True


class ApplicationDecisionResponse(BaseModel):
    application: DecisionResult

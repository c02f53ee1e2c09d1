"""
Pydantic schemas for the Vacancy API
"""
from pydantic import AnyHttpUrl, BaseModel, EmailStr, Field, field_validator, model_validator
from typing import Annotated, List, Literal, Optional
from datetime import datetime

from talenthub.schemas.application import ApplicationResponse
from talenthub.services.keywords import normalize_string_list

VacancyStatusLiteral = Literal["OPEN", "CLOSED"]
NonEmptyStr = Annotated[str, Field(min_length=1)]


class VacancyFilters(BaseModel):
    """Normalized listing filters (see services.vacancy_filters)"""
    status: Optional[VacancyStatusLiteral] = None
    modality: Optional[str] = None
    seniority: Optional[str] = None
    contractType: Optional[str] = None
    locationState: Optional[str] = None
    locationCity: Optional[str] = None
    course: Optional[str] = None
    search: Optional[str] = None
    recruiterId: Optional[str] = None
    minSalary: Optional[int] = Field(None, ge=0)
    maxSalary: Optional[int] = Field(None, ge=0)
    mine: bool = False
    includeDrafts: bool = False
    page: int = Field(1, gt=0)
    pageSize: int = Field(12, gt=0, le=50)

    class Config:
        str_strip_whitespace = True


class VacancyBase(BaseModel):
    """Validators shared by the create and update payloads"""

    @field_validator("skills", "preferredCourses", "benefits", "keywords", check_fields=False)
    @classmethod
    def split_lists(cls, v):
        """Accept packed entries such as "Python, SQL" """
        if v is None:
            return v
        return normalize_string_list(v)

    @field_validator("salaryMax", check_fields=False)
    @classmethod
    def salary_range(cls, v, info):
        salary_min = info.data.get("salaryMin")
        if v is not None and salary_min is not None and v < salary_min:
            raise ValueError("salaryMax must not be lower than salaryMin")
        return v

    class Config:
        str_strip_whitespace = True


class VacancyCreate(VacancyBase):
    """Schema for publishing (or drafting) a vacancy"""
    title: str = Field(min_length=3)
    description: str = Field(min_length=10)
    skills: List[NonEmptyStr] = Field(min_length=1)
    preferredCourses: List[NonEmptyStr] = Field(min_length=1)
    modality: str = Field(min_length=3)
    seniority: str = Field(min_length=3)
    contractType: str = Field(min_length=2)
    workload: Optional[str] = None
    salaryMin: Optional[int] = Field(None, ge=0)
    salaryMax: Optional[int] = Field(None, ge=0)
    salaryCurrency: Optional[str] = Field(None, min_length=3, max_length=3)
    benefits: Optional[List[NonEmptyStr]] = None
    deadline: Optional[datetime] = None
    locationCity: Optional[str] = None
    locationState: Optional[str] = None
    locationCountry: Optional[str] = None
    companyName: Optional[str] = Field(None, max_length=120)
    contactEmail: EmailStr
    contactPhone: Optional[str] = None
    contactUrl: Optional[AnyHttpUrl] = None
    contactNotes: Optional[str] = None
    keywords: Optional[List[NonEmptyStr]] = None
    status: Optional[VacancyStatusLiteral] = None
    isDraft: Optional[bool] = None


class VacancyUpdate(VacancyBase):
    """Partial update; only the fields sent are applied"""
    title: Optional[str] = Field(None, min_length=3)
    description: Optional[str] = Field(None, min_length=10)
    skills: Optional[List[NonEmptyStr]] = Field(None, min_length=1)
    preferredCourses: Optional[List[NonEmptyStr]] = Field(None, min_length=1)
    modality: Optional[str] = Field(None, min_length=3)
    seniority: Optional[str] = Field(None, min_length=3)
    contractType: Optional[str] = Field(None, min_length=2)
    workload: Optional[str] = None
    salaryMin: Optional[int] = Field(None, ge=0)
    salaryMax: Optional[int] = Field(None, ge=0)
    salaryCurrency: Optional[str] = Field(None, min_length=3, max_length=3)
    benefits: Optional[List[NonEmptyStr]] = None
    deadline: Optional[datetime] = None
    locationCity: Optional[str] = None
    locationState: Optional[str] = None
    locationCountry: Optional[str] = None
    companyName: Optional[str] = Field(None, max_length=120)
    contactEmail: Optional[EmailStr] = None
    contactPhone: Optional[str] = None
    contactUrl: Optional[AnyHttpUrl] = None
    contactNotes: Optional[str] = None
    keywords: Optional[List[NonEmptyStr]] = None
    status: Optional[VacancyStatusLiteral] = None
    isDraft: Optional[bool] = None

    @model_validator(mode="after")
    def reject_required_nulls(self):
        required = (
            "title", "description", "skills", "preferredCourses", "modality",
            "seniority", "contractType", "contactEmail", "status", "isDraft",
        )
        nulls = [name for name in required if name in self.model_fields_set and getattr(self, name) is None]
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")
        return self


class RecruiterSummary(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    companyName: Optional[str] = None

    class Config:
        from_attributes = True


class VacancyResponse(BaseModel):
    """Vacancy as returned to clients"""
    id: str
    title: str
    description: str
    skills: List[str] = []
    preferredCourses: List[str] = []
    keywords: List[str] = []
    modality: str
    seniority: str
    contractType: str
    workload: Optional[str] = None
    salaryMin: Optional[int] = None
    salaryMax: Optional[int] = None
    salaryCurrency: Optional[str] = None
    benefits: List[str] = []
    deadline: Optional[datetime] = None
    locationCity: Optional[str] = None
    locationState: Optional[str] = None
    locationCountry: Optional[str] = None
    companyName: Optional[str] = None
    contactEmail: str
    contactPhone: Optional[str] = None
    contactUrl: Optional[str] = None
    contactNotes: Optional[str] = None
    status: str
    isDraft: bool
    recruiterId: str
    recruiter: Optional[RecruiterSummary] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    closedAt: Optional[datetime] = None
    applicationCount: int = 0

    class Config:
        from_attributes = True


class ViewerApplicationState(BaseModel):
    id: str
    status: str


class ViewerState(BaseModel):
    canEdit: bool
    canApply: bool
    application: Optional[ViewerApplicationState] = None


class VacancyListItem(VacancyResponse):
    viewerState: Optional[ViewerState] = None


class VacancyListResponse(BaseModel):
    items: List[VacancyListItem]
    total: int
    page: int
    pageSize: int
    hasMore: bool
    filters: VacancyFilters


class VacancyPermissions(BaseModel):
    canEdit: bool
    canApply: bool
    canManageApplications: bool


class VacancyDetail(VacancyResponse):
    applications: List[ApplicationResponse] = []


class VacancyDetailResponse(BaseModel):
    vacancy: VacancyDetail
    applications: List[ApplicationResponse]
    permissions: VacancyPermissions


class VacancyCreatedResponse(BaseModel):
    vacancy: VacancyResponse

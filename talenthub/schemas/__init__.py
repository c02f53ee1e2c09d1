from talenthub.schemas.application import (
    ApplicationCreate, ApplicationDecision, ApplicationResponse,
    ApplicationCreatedResponse, ApplicationDecisionResponse
)
from talenthub.schemas.vacancy import (
    VacancyFilters, VacancyCreate, VacancyUpdate, VacancyResponse,
    VacancyListItem, VacancyListResponse, VacancyDetailResponse, VacancyCreatedResponse
)
from talenthub.schemas.notification import (
    NotificationResponse, NotificationListResponse, MarkAsReadRequest,
    MarkAsReadResponse, CleanupCountResponse, CleanupResponse
)

from fastapi import APIRouter
from talenthub.api.routes import vacancies, notifications

api_router = APIRouter()

# Include all route modules
api_router.include_router(vacancies.router)
api_router.include_router(notifications.router)

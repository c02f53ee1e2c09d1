"""
Talent Hub Vacancy API
======================
Job vacancies for a multi-role talent platform

Flow:
1. Recruiters create vacancies (drafts stay private until published)
2. Students and managers browse vacancies ranked by their course
3. Candidates apply; the recruiter is notified
4. The recruiter accepts or rejects; the candidate is notified
"""
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from talenthub.core.config import settings
from talenthub.core.database import init_db
from talenthub.core.errors import TalentHubError
from talenthub.core.logging import configure_logging
from talenthub.api import api_router

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup"""
    logger.info("starting %s", settings.APP_NAME)
    init_db()
    yield
    logger.info("shutting down %s", settings.APP_NAME)


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="""
## Talent Hub Vacancy API

### Features:
- **Vacancies**: Recruiters publish, draft, edit and close job vacancies
- **Search**: Filter by modality, seniority, location, salary, course and free text
- **Ranking**: Vacancies matching the candidate's course come first
- **Applications**: Students and managers apply; recruiters accept or reject
- **Notifications**: In-app messages for new vacancies, applications and decisions
    """,
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    started_at = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started_at) * 1000.0
    logger.info(
        "http request method=%s path=%s status=%s duration_ms=%.2f",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


# ============== ERROR HANDLERS ==============

def _field_errors(errors):
    return [
        {"field": ".".join(str(part) for part in error["loc"] if part != "body"), "message": error["msg"]}
        for error in errors
    ]


@app.exception_handler(TalentHubError)
async def talenthub_error_handler(request: Request, exc: TalentHubError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid data", "errors": _field_errors(exc.errors())},
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid data", "errors": _field_errors(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Include API routes
app.include_router(api_router, prefix="/api/v1")


# Health check endpoint
@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": settings.APP_NAME}


@app.get("/")
def root():
    """Root endpoint with API info"""
    return {
        "service": settings.APP_NAME,
        "version": "1.0.0",
        "docs": "/docs",
        "endpoints": {
            "vacancies": "/api/v1/vacancies",
            "notifications": "/api/v1/notifications"
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("talenthub.main:app", host="0.0.0.0", port=8000, reload=True)

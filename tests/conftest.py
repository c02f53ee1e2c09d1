from __future__ import annotations

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ["CLEANUP_TOKEN"] = "test-cleanup-token"

from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient

from talenthub.core.auth import create_access_token
from talenthub.core.database import Base, engine, get_db, SessionLocal
from talenthub.main import app
from talenthub.models import User, Vacancy


@pytest.fixture()
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db) -> TestClient:
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def make_user(db) -> Callable[..., User]:
    counter = {"n": 0}

    def _make(user_type: str = "aluno", course: str | None = None, name: str | None = None) -> User:
        counter["n"] += 1
        user = User(
            name=name or f"User {counter['n']}",
            email=f"user{counter['n']}@example.com",
            userType=user_type,
            course=course,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture()
def make_vacancy(db) -> Callable[..., Vacancy]:
    def _make(recruiter: User, **overrides: Any) -> Vacancy:
        values: dict[str, Any] = {
            "title": "Backend Developer",
            "description": "Build APIs with Python and PostgreSQL",
            "skills": ["Python"],
            "preferredCourses": ["Ciência da Computação"],
            "keywords": ["backend developer", "python"],
            "modality": "Remote",
            "seniority": "Junior",
            "contractType": "CLT",
            "contactEmail": "jobs@example.com",
            "status": "OPEN",
            "isDraft": False,
            "recruiterId": recruiter.id,
        }
        values.update(overrides)
        vacancy = Vacancy(**values)
        db.add(vacancy)
        db.commit()
        db.refresh(vacancy)
        return vacancy

    return _make


@pytest.fixture()
def auth_headers() -> Callable[[User], dict[str, str]]:
    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token({'sub': user.id})}"}

    return _headers

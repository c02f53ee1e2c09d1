"""
User database model
Accounts are created by the registration flow; the vacancy service reads them
"""
import uuid
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from talenthub.core.database import Base
import enum


class UserType(str, enum.Enum):
    STUDENT = "aluno"
    MANAGER = "gestor"
    RECRUITER = "recrutador"


class User(Base):
    __tablename__ = "users"

    id = Column(String(50), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=True)
    email = Column(String(200), nullable=False, unique=True)
    userType = Column(String(30), nullable=False)
    course = Column(String(200), nullable=True)  # Used to rank vacancies for students
    companyName = Column(String(200), nullable=True)  # Recruiters only
    createdAt = Column(DateTime, default=datetime.utcnow)

    vacancies = relationship("Vacancy", back_populates="recruiter")
    notifications = relationship("Notification", back_populates="user")

    def __repr__(self):
        return f"<User {self.email} ({self.userType})>"

# app/auth/models.py
from sqlalchemy import Column, DateTime, Integer, String
from app.core.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    unit_number = Column(String, nullable=True)
    role = Column(String, nullable=False, default="resident")
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=True)

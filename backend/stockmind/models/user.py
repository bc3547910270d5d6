"""User model for content creators."""
from sqlalchemy import Column, String, Text, DateTime, func
from stockmind.database import Base
from stockmind.models.types import generate_id


class User(Base):
    """Account owning projects and scripts."""
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=generate_id)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(Text, nullable=True)  # Null for accounts created by upsert
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    profile_image_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

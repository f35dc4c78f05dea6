from sqlalchemy import Column, String, Integer, Boolean
from sqlalchemy.orm import relationship

from cvdash.db.base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(16), nullable=False, default="USER")
    plan = Column(String(16), nullable=False, default="FREE")
    credits = Column(Integer, nullable=False, default=5)
    is_active = Column(Boolean, default=True)

    # Relationships
    documents = relationship("Document", back_populates="owner", cascade="all, delete-orphan")

import enum
from sqlalchemy import Boolean, Column, Integer, String, DateTime, Enum, ForeignKey, func
from docflow.db.session import Base


class Role(str, enum.Enum):
    ADMIN = "admin"
    DOCUMENT_CREATOR = "document_creator"
    DOCUMENT_UPLOADER = "document_uploader"
    DOCUMENT_APPROVER = "document_approver"


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    username = Column(String(100), nullable=False)
    role = Column(Enum(Role, native_enum=False, length=50, values_callable=lambda e: [m.value for m in e]), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class UserCredentials(Base):
    __tablename__ = "user_credentials"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)

"""Account, role assignment and credential ORM models."""
import uuid
import enum
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from campus_events.database import Base


class Role(str, enum.Enum):
    admin = "admin"
    staff = "staff"
    student = "student"


class Account(Base):
    __tablename__ = "accounts"

    account_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    full_name = Column(String(150), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    department = Column(String(150), nullable=True)
    is_approved = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    role_assignment = relationship(
        "RoleAssignment", uselist=False, back_populates="account",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    credential = relationship(
        "Credential", uselist=False, cascade="all, delete-orphan", passive_deletes=True,
    )

    @property
    def role(self):
        return self.role_assignment.role if self.role_assignment else None


class RoleAssignment(Base):
    """Exactly one row per account; the primary key enforces it."""

    __tablename__ = "account_roles"

    account_id = Column(
        String(36), ForeignKey("accounts.account_id", ondelete="CASCADE"), primary_key=True,
    )
    role = Column(SAEnum(Role), nullable=False)
    assigned_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    account = relationship("Account", back_populates="role_assignment")


class Credential(Base):
    __tablename__ = "credentials"

    account_id = Column(
        String(36), ForeignKey("accounts.account_id", ondelete="CASCADE"), primary_key=True,
    )
    password_hash = Column(String(255), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

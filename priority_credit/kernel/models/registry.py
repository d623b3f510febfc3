"""
Persisted registry state.

One row for the administrator slot, one table per registry. Records are
never deleted: validator revocation only flips the status column.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from priority_credit.kernel.models.base import Base, PRINCIPAL_LENGTH, TimestampMixin
from priority_credit.kernel.state import DeveloperStatus, ValidatorStatus

ADMINISTRATOR_SLOT_ID = 1


class AdministratorSlot(Base, TimestampMixin):
    """The single administrator row."""

    __tablename__ = "administrator_slot"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        default=ADMINISTRATOR_SLOT_ID,
    )
    principal: Mapped[str] = mapped_column(
        String(PRINCIPAL_LENGTH),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<AdministratorSlot {self.principal}>"


class ValidatorRecord(Base, TimestampMixin):
    """Validator appointed by the administrator."""

    __tablename__ = "validators"

    principal: Mapped[str] = mapped_column(
        String(PRINCIPAL_LENGTH),
        primary_key=True,
    )
    appointed_by: Mapped[str] = mapped_column(
        String(PRINCIPAL_LENGTH),
        nullable=False,
    )
    status: Mapped[ValidatorStatus] = mapped_column(
        String(20),
        default=ValidatorStatus.ACTIVE,
        nullable=False,
    )
    revoked_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<ValidatorRecord {self.principal} status={self.status}>"


class DeveloperRecord(Base, TimestampMixin):
    """Project developer registered by a validator."""

    __tablename__ = "project_developers"

    principal: Mapped[str] = mapped_column(
        String(PRINCIPAL_LENGTH),
        primary_key=True,
    )
    # Non-owning: deleting or revoking a validator never cascades here
    registered_by: Mapped[str] = mapped_column(
        String(PRINCIPAL_LENGTH),
        ForeignKey("validators.principal"),
        nullable=False,
        index=True,
    )
    project_name: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
    )
    status: Mapped[DeveloperStatus] = mapped_column(
        String(20),
        default=DeveloperStatus.ACTIVE,
        nullable=False,
    )
    # Registration order; reloaded state iterates in this order
    sequence: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<DeveloperRecord {self.principal} by={self.registered_by}>"

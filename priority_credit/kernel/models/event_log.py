"""
Immutable event log for audit trail.

Every successful registry mutation is logged here in the same transaction
as the state change. Rows are never updated or deleted.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, Integer, String, func, Index, JSON, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from priority_credit.kernel.models.base import Base, PRINCIPAL_LENGTH, generate_uuid


class EventType(str, Enum):
    """All event types for the audit log."""

    REGISTRY_INITIALIZED = "registry.initialized"
    ADMINISTRATION_TRANSFERRED = "administration.transferred"
    VALIDATOR_REGISTERED = "validator.registered"
    VALIDATOR_REVOKED = "validator.revoked"
    DEVELOPER_REGISTERED = "developer.registered"


class EventLog(Base):
    """
    Append-only audit record.

    entity_id is the principal the event is about; sender is the principal
    that made the call (None for genesis).
    """

    __tablename__ = "event_log"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=generate_uuid,
    )
    event_type: Mapped[EventType] = mapped_column(
        String(100),
        nullable=False,
        index=True,
    )
    entity_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )
    entity_id: Mapped[str] = mapped_column(
        String(PRINCIPAL_LENGTH),
        nullable=False,
    )
    sender: Mapped[Optional[str]] = mapped_column(
        String(PRINCIPAL_LENGTH),
        nullable=True,
        index=True,
    )
    block_height: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    tx_index: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
    )
    payload: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_event_log_entity", "entity_type", "entity_id"),
        Index("ix_event_log_block", "block_height", "tx_index"),
    )

    def __repr__(self) -> str:
        return f"<EventLog {self.event_type} {self.entity_type}:{self.entity_id} block={self.block_height}>"

"""
Kernel Data Models

SQLAlchemy models for the persisted registry, mined blocks and audit log.
"""

from priority_credit.kernel.models.base import Base, TimestampMixin, PRINCIPAL_LENGTH, generate_uuid
from priority_credit.kernel.models.registry import (
    ADMINISTRATOR_SLOT_ID,
    AdministratorSlot,
    ValidatorRecord,
    DeveloperRecord,
)
from priority_credit.kernel.models.block import BlockRecord
from priority_credit.kernel.models.event_log import EventLog, EventType

__all__ = [
    "Base",
    "TimestampMixin",
    "PRINCIPAL_LENGTH",
    "generate_uuid",
    # Registry
    "ADMINISTRATOR_SLOT_ID",
    "AdministratorSlot",
    "ValidatorRecord",
    "DeveloperRecord",
    # Blocks
    "BlockRecord",
    # Event Log
    "EventLog",
    "EventType",
]

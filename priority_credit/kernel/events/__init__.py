"""
Audit event infrastructure.

Provides the emitted event payloads and the append-only event store.
"""

from priority_credit.kernel.events.event_store import EventStore
from priority_credit.kernel.events.event_types import (
    RegistryEvent,
    RegistryInitializedEvent,
    AdministrationTransferredEvent,
    ValidatorRegisteredEvent,
    ValidatorRevokedEvent,
    DeveloperRegisteredEvent,
)

__all__ = [
    "EventStore",
    "RegistryEvent",
    "RegistryInitializedEvent",
    "AdministrationTransferredEvent",
    "ValidatorRegisteredEvent",
    "ValidatorRevokedEvent",
    "DeveloperRegisteredEvent",
]

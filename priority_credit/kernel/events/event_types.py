"""
Event type definitions using Pydantic for validation.

These are the payloads emitted by successful registry calls and stored in
the audit trail.
"""

from typing import Any, ClassVar, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from priority_credit.kernel.models.event_log import EventType


class RegistryEvent(BaseModel):
    """Base event payload structure."""

    model_config = ConfigDict(extra="allow", frozen=True)

    event_type: ClassVar[EventType]
    entity_type: ClassVar[str]

    sender: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @property
    def entity_id(self) -> str:
        raise NotImplementedError

    def payload(self) -> Dict[str, Any]:
        """Event body without the routing fields."""
        return self.model_dump(mode="json", exclude={"sender"})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.event_type.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "sender": self.sender,
            "payload": self.payload(),
        }


class RegistryInitializedEvent(RegistryEvent):
    """Genesis: the deployer takes the administrator slot."""

    event_type: ClassVar[EventType] = EventType.REGISTRY_INITIALIZED
    entity_type: ClassVar[str] = "administrator"

    administrator: str

    @property
    def entity_id(self) -> str:
        return self.administrator


class AdministrationTransferredEvent(RegistryEvent):
    """Administrator slot handed to a new principal."""

    event_type: ClassVar[EventType] = EventType.ADMINISTRATION_TRANSFERRED
    entity_type: ClassVar[str] = "administrator"

    previous_administrator: str
    new_administrator: str

    @property
    def entity_id(self) -> str:
        return self.new_administrator


class ValidatorRegisteredEvent(RegistryEvent):
    """Validator appointed."""

    event_type: ClassVar[EventType] = EventType.VALIDATOR_REGISTERED
    entity_type: ClassVar[str] = "validator"

    validator: str
    appointed_by: str

    @property
    def entity_id(self) -> str:
        return self.validator


class ValidatorRevokedEvent(RegistryEvent):
    """Validator revoked (soft delete)."""

    event_type: ClassVar[EventType] = EventType.VALIDATOR_REVOKED
    entity_type: ClassVar[str] = "validator"

    validator: str
    revoked_by: str

    @property
    def entity_id(self) -> str:
        return self.validator


class DeveloperRegisteredEvent(RegistryEvent):
    """Project developer registered by a validator."""

    event_type: ClassVar[EventType] = EventType.DEVELOPER_REGISTERED
    entity_type: ClassVar[str] = "developer"

    developer: str
    registered_by: str
    project_name: str

    @property
    def entity_id(self) -> str:
        return self.developer

"""
Registry state: the explicit context object every operation receives.

Holds one scalar (the administrator) and two keyed collections (validators
and project developers). Created once at genesis, then mutated only through
the administration, validator and developer operations.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from priority_credit.config import Settings


class ValidatorStatus(str, Enum):
    """Validator lifecycle states."""
    ACTIVE = "active"
    REVOKED = "revoked"


class DeveloperStatus(str, Enum):
    """Project developer lifecycle states."""
    ACTIVE = "active"


class RegistryNotInitializedError(RuntimeError):
    """Raised when an operation runs against state that skipped genesis."""


@dataclass
class Validator:
    """A principal appointed by the administrator."""

    principal: str
    appointed_by: str
    status: ValidatorStatus = ValidatorStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == ValidatorStatus.ACTIVE

    def to_dict(self) -> dict:
        return {
            "principal": self.principal,
            "appointed_by": self.appointed_by,
            "status": self.status.value,
        }


@dataclass
class ProjectDeveloper:
    """A project developer registered by an active validator."""

    principal: str
    registered_by: str  # non-owning back-reference to the validator
    project_name: str
    status: DeveloperStatus = DeveloperStatus.ACTIVE

    def to_dict(self) -> dict:
        return {
            "principal": self.principal,
            "registered_by": self.registered_by,
            "project_name": self.project_name,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class RegistryPolicy:
    """Input bounds and toggles applied by the registry operations."""

    project_name_max_length: int = 256
    project_name_ascii_only: bool = True
    allow_self_transfer: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "RegistryPolicy":
        return cls(
            project_name_max_length=settings.project_name_max_length,
            project_name_ascii_only=settings.project_name_ascii_only,
            allow_self_transfer=settings.allow_self_transfer,
        )


@dataclass
class RegistryState:
    """Administrator slot plus the validator and developer registries."""

    administrator: Optional[str] = None
    validators: Dict[str, Validator] = field(default_factory=dict)
    developers: Dict[str, ProjectDeveloper] = field(default_factory=dict)
    policy: RegistryPolicy = field(default_factory=RegistryPolicy)

    @classmethod
    def genesis(
        cls,
        deployer: str,
        policy: Optional[RegistryPolicy] = None,
    ) -> "RegistryState":
        """Initialize the registry with the deployer as administrator."""
        if not deployer:
            raise ValueError("Genesis requires a deployer principal")
        return cls(administrator=deployer, policy=policy or RegistryPolicy())

    @property
    def is_initialized(self) -> bool:
        return self.administrator is not None

    def require_administrator(self) -> str:
        if self.administrator is None:
            raise RegistryNotInitializedError("Registry state has no administrator")
        return self.administrator

    def snapshot(self) -> "RegistryState":
        """Deep copy used as a working copy for one call."""
        return copy.deepcopy(self)

"""
Role resolution for the three-tier permission chain.

A principal's role is computed from current state on every call; nothing
is cached between calls.
"""

from enum import Enum
from typing import Set

from priority_credit.kernel.state import RegistryState


class Role(str, Enum):
    """Permission tiers, highest precedence first."""
    ADMINISTRATOR = "administrator"
    VALIDATOR = "validator"
    DEVELOPER = "developer"
    NONE = "none"


def role_of(principal: str, state: RegistryState) -> Role:
    """
    Compute the role a principal holds in the given state.

    Precedence: administrator, active validator, registered developer, none.
    A revoked validator holds no validator role.
    """
    if principal == state.require_administrator():
        return Role.ADMINISTRATOR

    validator = state.validators.get(principal)
    if validator is not None and validator.is_active:
        return Role.VALIDATOR

    if principal in state.developers:
        return Role.DEVELOPER

    return Role.NONE


def is_administrator(principal: str, state: RegistryState) -> bool:
    return role_of(principal, state) == Role.ADMINISTRATOR


def is_active_validator(principal: str, state: RegistryState) -> bool:
    """True when the principal holds an active validator record."""
    validator = state.validators.get(principal)
    return validator is not None and validator.is_active


def roles_held(principal: str, state: RegistryState) -> Set[Role]:
    """Every tier the principal currently occupies (empty when none)."""
    roles: Set[Role] = set()
    if principal == state.require_administrator():
        roles.add(Role.ADMINISTRATOR)
    if is_active_validator(principal, state):
        roles.add(Role.VALIDATOR)
    if principal in state.developers:
        roles.add(Role.DEVELOPER)
    return roles

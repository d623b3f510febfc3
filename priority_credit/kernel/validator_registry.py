"""
Validator registry: principals appointed by the administrator.

Validators gate who may register project developers. Revocation is a soft
delete so earlier registrations stay auditable; a revoked validator cannot
be re-registered.
"""

from typing import Optional

from priority_credit.kernel.result import Err, ErrorKind, Ok, Result
from priority_credit.kernel.roles import Role, is_active_validator as _is_active_validator, role_of
from priority_credit.kernel.state import RegistryState, Validator, ValidatorStatus
from priority_credit.logging_config import get_logger

logger = get_logger(__name__)


def register_validator(
    state: RegistryState,
    caller: str,
    candidate: str,
) -> Result[bool]:
    """
    Appoint a new validator.

    Authorization is checked before the duplicate check, so a non-administrator
    learns nothing about existing records.

    Args:
        state: Registry state to mutate
        caller: Authenticated principal making the call
        candidate: Principal to appoint

    Returns:
        Ok(True), Err(UNAUTHORIZED) or Err(ALREADY_REGISTERED)
    """
    if role_of(caller, state) != Role.ADMINISTRATOR:
        logger.info(
            "Validator registration rejected",
            extra={"caller": caller, "candidate": candidate, "reason": ErrorKind.UNAUTHORIZED.value},
        )
        return Err(ErrorKind.UNAUTHORIZED)

    if candidate in state.validators:
        logger.info(
            "Validator registration rejected",
            extra={"caller": caller, "candidate": candidate, "reason": ErrorKind.ALREADY_REGISTERED.value},
        )
        return Err(ErrorKind.ALREADY_REGISTERED)

    state.validators[candidate] = Validator(principal=candidate, appointed_by=caller)
    logger.info("Validator registered", extra={"validator": candidate, "appointed_by": caller})
    return Ok(True)


def revoke_validator(
    state: RegistryState,
    caller: str,
    target: str,
) -> Result[bool]:
    """
    Revoke an active validator.

    The record is kept with status REVOKED; developers it registered are
    untouched.

    Returns:
        Ok(True), Err(UNAUTHORIZED), Err(NOT_FOUND) for an unknown target,
        or Err(INVALID_INPUT) when the target is already revoked
    """
    if role_of(caller, state) != Role.ADMINISTRATOR:
        logger.info(
            "Validator revocation rejected",
            extra={"caller": caller, "target": target, "reason": ErrorKind.UNAUTHORIZED.value},
        )
        return Err(ErrorKind.UNAUTHORIZED)

    validator = state.validators.get(target)
    if validator is None:
        logger.info(
            "Validator revocation rejected",
            extra={"caller": caller, "target": target, "reason": ErrorKind.NOT_FOUND.value},
        )
        return Err(ErrorKind.NOT_FOUND)
    if not validator.is_active:
        logger.info(
            "Validator revocation rejected",
            extra={"caller": caller, "target": target, "reason": ErrorKind.INVALID_INPUT.value},
        )
        return Err(ErrorKind.INVALID_INPUT)

    validator.status = ValidatorStatus.REVOKED
    logger.info("Validator revoked", extra={"validator": target, "revoked_by": caller})
    return Ok(True)


def is_active_validator(state: RegistryState, candidate: str) -> bool:
    """Read-only capability consumed by the developer registry."""
    return _is_active_validator(candidate, state)


def get_validator(state: RegistryState, candidate: str) -> Optional[Validator]:
    return state.validators.get(candidate)

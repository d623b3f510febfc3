"""
Administration authority: owns the singleton administrator slot.
"""

from priority_credit.kernel.result import Err, ErrorKind, Ok, Result
from priority_credit.kernel.roles import Role, role_of
from priority_credit.kernel.state import RegistryState
from priority_credit.logging_config import get_logger

logger = get_logger(__name__)


def get_administrator(state: RegistryState) -> str:
    """Return the current administrator principal."""
    return state.require_administrator()


def transfer_administration(
    state: RegistryState,
    caller: str,
    new_admin: str,
) -> Result[bool]:
    """
    Hand the administrator slot to another principal.

    Only the current administrator may transfer. A transfer to the current
    administrator is a no-op success unless the policy forbids it.

    Args:
        state: Registry state to mutate
        caller: Authenticated principal making the call
        new_admin: Principal that becomes administrator

    Returns:
        Ok(True) on success, Err(UNAUTHORIZED) or Err(INVALID_INPUT) otherwise
    """
    if role_of(caller, state) != Role.ADMINISTRATOR:
        logger.info(
            "Administration transfer rejected",
            extra={"caller": caller, "reason": ErrorKind.UNAUTHORIZED.value},
        )
        return Err(ErrorKind.UNAUTHORIZED)

    if new_admin == caller and not state.policy.allow_self_transfer:
        logger.info(
            "Administration transfer rejected",
            extra={"caller": caller, "reason": ErrorKind.INVALID_INPUT.value},
        )
        return Err(ErrorKind.INVALID_INPUT)

    state.administrator = new_admin
    logger.info(
        "Administration transferred",
        extra={"previous_administrator": caller, "new_administrator": new_admin},
    )
    return Ok(True)

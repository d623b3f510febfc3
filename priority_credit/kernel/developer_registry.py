"""
Developer registry: project developers registered by active validators.

Each record stores the registering validator as a non-owning back-reference,
used for lookup and audit only.
"""

from typing import List, Optional

from priority_credit.kernel.result import Err, ErrorKind, Ok, Result
from priority_credit.kernel.state import ProjectDeveloper, RegistryPolicy, RegistryState
from priority_credit.kernel.validator_registry import is_active_validator
from priority_credit.logging_config import get_logger

logger = get_logger(__name__)


def validate_project_name(project_name: object, policy: RegistryPolicy) -> bool:
    """
    Check a project name against the registry policy.

    Must be a non-empty string of at most ``project_name_max_length`` code
    points; printable ASCII only when ``project_name_ascii_only`` is set.
    Whitespace-only names count as empty.
    """
    if not isinstance(project_name, str):
        return False
    if not project_name.strip():
        return False
    if len(project_name) > policy.project_name_max_length:
        return False
    if policy.project_name_ascii_only and not all(" " <= ch <= "~" for ch in project_name):
        return False
    return True


def register_project_developer(
    state: RegistryState,
    caller: str,
    candidate: str,
    project_name: str,
) -> Result[bool]:
    """
    Register a project developer on behalf of the administrator.

    Checks run in order: caller authorization, project name, duplicate key.
    Nothing is written unless every check passes.

    Args:
        state: Registry state to mutate
        caller: Authenticated principal making the call; must be an active validator
        candidate: Developer principal to register
        project_name: Free-text project name

    Returns:
        Ok(True), Err(UNAUTHORIZED), Err(INVALID_INPUT) or Err(ALREADY_REGISTERED)
    """
    if not is_active_validator(state, caller):
        logger.info(
            "Developer registration rejected",
            extra={"caller": caller, "candidate": candidate, "reason": ErrorKind.UNAUTHORIZED.value},
        )
        return Err(ErrorKind.UNAUTHORIZED)

    if not validate_project_name(project_name, state.policy):
        logger.info(
            "Developer registration rejected",
            extra={"caller": caller, "candidate": candidate, "reason": ErrorKind.INVALID_INPUT.value},
        )
        return Err(ErrorKind.INVALID_INPUT)

    if candidate in state.developers:
        logger.info(
            "Developer registration rejected",
            extra={"caller": caller, "candidate": candidate, "reason": ErrorKind.ALREADY_REGISTERED.value},
        )
        return Err(ErrorKind.ALREADY_REGISTERED)

    state.developers[candidate] = ProjectDeveloper(
        principal=candidate,
        registered_by=caller,
        project_name=project_name,
    )
    logger.info(
        "Developer registered",
        extra={"developer": candidate, "registered_by": caller, "project_name": project_name},
    )
    return Ok(True)


def get_developer(state: RegistryState, candidate: str) -> Optional[ProjectDeveloper]:
    return state.developers.get(candidate)


def get_validator_for(state: RegistryState, candidate: str) -> Optional[str]:
    """Principal of the validator that registered the developer, if any."""
    developer = state.developers.get(candidate)
    return developer.registered_by if developer else None


def get_developers_registered_by(
    state: RegistryState,
    validator: str,
) -> Result[List[ProjectDeveloper]]:
    """
    Developers registered by a validator, in registration order.

    Returns Err(NOT_FOUND) when the principal was never a validator.
    Revoked validators still answer, since their registrations stand.
    """
    if validator not in state.validators:
        return Err(ErrorKind.NOT_FOUND)
    return Ok([d for d in state.developers.values() if d.registered_by == validator])

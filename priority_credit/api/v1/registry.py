"""
Read-only registry endpoints.
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from priority_credit.api.deps import CurrentState, PrincipalPath
from priority_credit.kernel import developer_registry, validator_registry
from priority_credit.kernel.administration import get_administrator
from priority_credit.kernel.roles import role_of, roles_held
from priority_credit.kernel.state import ProjectDeveloper, Validator
from priority_credit.schemas.common import ErrorResponse
from priority_credit.schemas.registry import (
    AdministratorResponse,
    DeveloperResponse,
    DeveloperValidatorResponse,
    RoleResponse,
    ValidatorResponse,
)

router = APIRouter(responses={404: {"model": ErrorResponse}})


def _validator_response(validator: Validator) -> ValidatorResponse:
    return ValidatorResponse(
        principal=validator.principal,
        appointed_by=validator.appointed_by,
        status=validator.status.value,
        is_active=validator.is_active,
    )


def _developer_response(developer: ProjectDeveloper) -> DeveloperResponse:
    return DeveloperResponse(
        principal=developer.principal,
        registered_by=developer.registered_by,
        project_name=developer.project_name,
        status=developer.status.value,
    )


@router.get("/administrator", response_model=AdministratorResponse)
async def read_administrator(state: CurrentState):
    """Current administrator."""
    return AdministratorResponse(administrator=get_administrator(state))


@router.get("/validators/{principal}", response_model=ValidatorResponse)
async def read_validator(principal: PrincipalPath, state: CurrentState):
    """Validator record, including revoked validators."""
    validator = validator_registry.get_validator(state, principal)
    if not validator:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Validator not found",
        )
    return _validator_response(validator)


@router.get("/validators/{principal}/developers", response_model=List[DeveloperResponse])
async def read_developers_registered_by(principal: PrincipalPath, state: CurrentState):
    """Developers a validator registered, in registration order."""
    result = developer_registry.get_developers_registered_by(state, principal)
    if not result.is_ok:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Validator not found",
        )
    return [_developer_response(d) for d in result.value]


@router.get("/developers/{principal}", response_model=DeveloperResponse)
async def read_developer(principal: PrincipalPath, state: CurrentState):
    """Project developer record."""
    developer = developer_registry.get_developer(state, principal)
    if not developer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Developer not found",
        )
    return _developer_response(developer)


@router.get("/developers/{principal}/validator", response_model=DeveloperValidatorResponse)
async def read_validator_for(principal: PrincipalPath, state: CurrentState):
    """Validator that registered the developer; null when not registered."""
    return DeveloperValidatorResponse(
        developer=principal,
        validator=developer_registry.get_validator_for(state, principal),
    )


@router.get("/roles/{principal}", response_model=RoleResponse)
async def read_role(principal: PrincipalPath, state: CurrentState):
    """Role a principal holds right now."""
    held = roles_held(principal, state)
    return RoleResponse(
        principal=principal,
        role=role_of(principal, state).value,
        roles=sorted(role.value for role in held),
    )

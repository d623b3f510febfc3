"""
Read-only registry schemas.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class AdministratorResponse(BaseModel):
    administrator: str


class ValidatorResponse(BaseModel):
    """Validator record."""

    model_config = ConfigDict(from_attributes=True)

    principal: str
    appointed_by: str
    status: str
    is_active: bool


class DeveloperResponse(BaseModel):
    """Project developer record."""

    model_config = ConfigDict(from_attributes=True)

    principal: str
    registered_by: str
    project_name: str
    status: str


class DeveloperValidatorResponse(BaseModel):
    developer: str
    validator: Optional[str] = None


class RoleResponse(BaseModel):
    """Role of a principal: the highest-precedence tier plus every tier held."""

    principal: str
    role: str
    roles: List[str]

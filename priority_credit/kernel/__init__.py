"""
Registry Kernel

The authorization and registration state machine:
- Administration authority (singleton administrator, authorized transfer)
- Validator registry (appointed by the administrator)
- Developer registry (registered by active validators)

Invariants:
- Exactly one administrator once genesis has run
- A registry key is written at most once; nothing is ever removed
- Validation precedes mutation; failures are returned, not raised
"""

from priority_credit.kernel.result import Ok, Err, ErrorKind, ERROR_CODES, Result
from priority_credit.kernel.state import (
    RegistryState,
    RegistryPolicy,
    Validator,
    ValidatorStatus,
    ProjectDeveloper,
    DeveloperStatus,
    RegistryNotInitializedError,
)
from priority_credit.kernel.roles import Role, role_of, roles_held
from priority_credit.kernel.administration import get_administrator, transfer_administration
from priority_credit.kernel.validator_registry import (
    register_validator,
    revoke_validator,
    is_active_validator,
    get_validator,
)
from priority_credit.kernel.developer_registry import (
    register_project_developer,
    get_developer,
    get_validator_for,
    get_developers_registered_by,
)

__all__ = [
    # Results
    "Ok",
    "Err",
    "ErrorKind",
    "ERROR_CODES",
    "Result",
    # State
    "RegistryState",
    "RegistryPolicy",
    "Validator",
    "ValidatorStatus",
    "ProjectDeveloper",
    "DeveloperStatus",
    "RegistryNotInitializedError",
    # Roles
    "Role",
    "role_of",
    "roles_held",
    # Administration
    "get_administrator",
    "transfer_administration",
    # Validators
    "register_validator",
    "revoke_validator",
    "is_active_validator",
    "get_validator",
    # Developers
    "register_project_developer",
    "get_developer",
    "get_validator_for",
    "get_developers_registered_by",
]

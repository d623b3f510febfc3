"""
Contract dispatcher for the priority-credit registry.

Maps wire-level function names to registry operations, type-checks the
arguments, and builds the events a successful call emits.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from priority_credit.kernel import administration, developer_registry, validator_registry
from priority_credit.kernel.events.event_types import (
    AdministrationTransferredEvent,
    DeveloperRegisteredEvent,
    RegistryEvent,
    ValidatorRegisteredEvent,
    ValidatorRevokedEvent,
)
from priority_credit.kernel.principal import normalize_principal
from priority_credit.kernel.result import Err, ErrorKind, Ok, Result
from priority_credit.kernel.roles import role_of
from priority_credit.kernel.state import RegistryState
from priority_credit.logging_config import get_logger

logger = get_logger(__name__)


class ParamType(str, Enum):
    """Argument types accepted on the wire."""
    PRINCIPAL = "principal"
    ASCII = "string-ascii"


@dataclass(frozen=True)
class FunctionSpec:
    """One callable contract function."""

    name: str
    params: Tuple[ParamType, ...]
    handler: Callable[..., Result[Any]]
    read_only: bool = False
    event: Optional[Callable[[str, Tuple[Any, ...]], RegistryEvent]] = None


def _read(fn: Callable[..., Any]) -> Callable[..., Result[Any]]:
    """Wrap a plain read function so it answers with Ok(value)."""
    def handler(state: RegistryState, sender: str, *args: Any) -> Result[Any]:
        value = fn(state, *args)
        if hasattr(value, "to_dict"):
            value = value.to_dict()
        return Ok(value)
    return handler


def _developers_by(state: RegistryState, sender: str, validator: str) -> Result[Any]:
    result = developer_registry.get_developers_registered_by(state, validator)
    if not result.is_ok:
        return result
    return Ok([d.to_dict() for d in result.value])


FUNCTIONS: Dict[str, FunctionSpec] = {spec.name: spec for spec in (
    # Public
    FunctionSpec(
        name="transfer-administration",
        params=(ParamType.PRINCIPAL,),
        handler=administration.transfer_administration,
        event=lambda sender, args: AdministrationTransferredEvent(
            sender=sender, previous_administrator=sender, new_administrator=args[0],
        ),
    ),
    FunctionSpec(
        name="register-validator",
        params=(ParamType.PRINCIPAL,),
        handler=validator_registry.register_validator,
        event=lambda sender, args: ValidatorRegisteredEvent(
            sender=sender, validator=args[0], appointed_by=sender,
        ),
    ),
    FunctionSpec(
        name="revoke-validator",
        params=(ParamType.PRINCIPAL,),
        handler=validator_registry.revoke_validator,
        event=lambda sender, args: ValidatorRevokedEvent(
            sender=sender, validator=args[0], revoked_by=sender,
        ),
    ),
    FunctionSpec(
        name="register-project-developer",
        params=(ParamType.PRINCIPAL, ParamType.ASCII),
        handler=developer_registry.register_project_developer,
        event=lambda sender, args: DeveloperRegisteredEvent(
            sender=sender, developer=args[0], registered_by=sender, project_name=args[1],
        ),
    ),
    # Read-only
    FunctionSpec(
        name="get-administrator",
        params=(),
        handler=_read(administration.get_administrator),
        read_only=True,
    ),
    FunctionSpec(
        name="is-active-validator",
        params=(ParamType.PRINCIPAL,),
        handler=_read(validator_registry.is_active_validator),
        read_only=True,
    ),
    FunctionSpec(
        name="get-validator",
        params=(ParamType.PRINCIPAL,),
        handler=_read(validator_registry.get_validator),
        read_only=True,
    ),
    FunctionSpec(
        name="get-developer",
        params=(ParamType.PRINCIPAL,),
        handler=_read(developer_registry.get_developer),
        read_only=True,
    ),
    FunctionSpec(
        name="get-validator-for",
        params=(ParamType.PRINCIPAL,),
        handler=_read(developer_registry.get_validator_for),
        read_only=True,
    ),
    FunctionSpec(
        name="get-developers-registered-by",
        params=(ParamType.PRINCIPAL,),
        handler=_developers_by,
        read_only=True,
    ),
    FunctionSpec(
        name="get-role",
        params=(ParamType.PRINCIPAL,),
        handler=_read(lambda state, principal: role_of(principal, state).value),
        read_only=True,
    ),
)}


def _coerce_args(params: Tuple[ParamType, ...], args: Sequence[Any]) -> Optional[Tuple[Any, ...]]:
    """Type-check wire arguments; None when any argument is malformed."""
    if len(args) != len(params):
        return None
    coerced: List[Any] = []
    for param, arg in zip(params, args):
        if param == ParamType.PRINCIPAL:
            principal = normalize_principal(arg)
            if principal is None:
                return None
            coerced.append(principal)
        else:
            if not isinstance(arg, str):
                return None
            coerced.append(arg)
    return tuple(coerced)


class PriorityCreditContract:
    """
    Stateless dispatcher; the caller owns the state it passes in.

    Usage:
        contract = PriorityCreditContract("priority-credit")
        result, events = contract.execute(state, "register-validator", [v], admin)
    """

    def __init__(self, name: str):
        self.name = name

    @staticmethod
    def functions(read_only: Optional[bool] = None) -> List[str]:
        """Names of the exposed functions, optionally filtered by kind."""
        return [
            name for name, spec in FUNCTIONS.items()
            if read_only is None or spec.read_only == read_only
        ]

    def execute(
        self,
        state: RegistryState,
        function: str,
        args: Sequence[Any],
        sender: str,
    ) -> Tuple[Result[Any], List[RegistryEvent]]:
        """
        Run one call against ``state``.

        Callers pass a working copy and keep it only when the result is Ok.

        Returns:
            The call result and the events emitted (empty on Err)
        """
        spec = FUNCTIONS.get(function)
        if spec is None:
            logger.info("Unknown contract function", extra={"function": function})
            return Err(ErrorKind.NOT_FOUND), []

        caller = normalize_principal(sender)
        coerced = _coerce_args(spec.params, args)
        if caller is None or coerced is None:
            logger.info(
                "Malformed contract call",
                extra={"function": function, "sender": sender},
            )
            return Err(ErrorKind.INVALID_INPUT), []

        result = spec.handler(state, caller, *coerced)
        if not result.is_ok or spec.event is None:
            return result, []
        return result, [spec.event(caller, coerced)]

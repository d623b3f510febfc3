"""Unit tests for the developer registry."""

import pytest

from priority_credit.kernel.developer_registry import (
    get_developer,
    get_developers_registered_by,
    get_validator_for,
    register_project_developer,
    validate_project_name,
)
from priority_credit.kernel.result import ErrorKind
from priority_credit.kernel.state import DeveloperStatus, RegistryPolicy, RegistryState
from priority_credit.kernel.validator_registry import register_validator, revoke_validator


@pytest.fixture
def with_validator(state: RegistryState, deployer: str, wallet_1: str) -> RegistryState:
    """Registry where wallet_1 is an active validator."""
    register_validator(state, deployer, wallet_1).expect_ok()
    return state


class TestRegisterProjectDeveloper:
    """Tests for register_project_developer."""

    def test_validator_registers_developer(self, with_validator: RegistryState, wallet_1: str, wallet_2: str):
        """Active validator creates the record and becomes its back-reference."""
        result = register_project_developer(with_validator, wallet_1, wallet_2, "Renewable Energy Solutions")

        assert result.expect_ok() is True
        developer = get_developer(with_validator, wallet_2)
        assert developer.project_name == "Renewable Energy Solutions"
        assert developer.registered_by == wallet_1
        assert developer.status == DeveloperStatus.ACTIVE
        assert get_validator_for(with_validator, wallet_2) == wallet_1

    def test_non_validator_is_unauthorized(self, state: RegistryState, wallet_1: str, wallet_2: str):
        """A principal with no validator record cannot register developers."""
        result = register_project_developer(state, wallet_1, wallet_2, "Renewable Energy Solutions")

        assert result.expect_err() == ErrorKind.UNAUTHORIZED
        assert get_developer(state, wallet_2) is None

    def test_admin_without_validator_record_is_unauthorized(self, state: RegistryState, deployer: str, wallet_2: str):
        """The administrator does not inherit validator rights."""
        result = register_project_developer(state, deployer, wallet_2, "Solar")

        assert result.expect_err() == ErrorKind.UNAUTHORIZED

    def test_admin_with_validator_record_may_register(self, state: RegistryState, deployer: str, wallet_2: str):
        register_validator(state, deployer, deployer).expect_ok()

        assert register_project_developer(state, deployer, wallet_2, "Solar").expect_ok() is True

    def test_revoked_validator_is_unauthorized(self, with_validator: RegistryState, deployer: str, wallet_1: str, wallet_2: str):
        revoke_validator(with_validator, deployer, wallet_1).expect_ok()

        result = register_project_developer(with_validator, wallet_1, wallet_2, "Solar")

        assert result.expect_err() == ErrorKind.UNAUTHORIZED

    def test_duplicate_developer(self, with_validator: RegistryState, deployer: str, wallet_1: str, wallet_2: str, wallet_3: str):
        """One record per developer, whoever registers it second."""
        register_project_developer(with_validator, wallet_1, wallet_2, "Solar").expect_ok()
        register_validator(with_validator, deployer, wallet_3).expect_ok()

        result = register_project_developer(with_validator, wallet_3, wallet_2, "Wind")

        assert result.expect_err() == ErrorKind.ALREADY_REGISTERED
        assert get_developer(with_validator, wallet_2).project_name == "Solar"
        assert get_validator_for(with_validator, wallet_2) == wallet_1

    @pytest.mark.parametrize("name", ["", "   ", "x" * 257, "café", "line\nbreak"])
    def test_invalid_project_name(self, with_validator: RegistryState, wallet_1: str, wallet_2: str, name: str):
        result = register_project_developer(with_validator, wallet_1, wallet_2, name)

        assert result.expect_err() == ErrorKind.INVALID_INPUT
        assert get_developer(with_validator, wallet_2) is None

    def test_name_checked_before_duplicate(self, with_validator: RegistryState, wallet_1: str, wallet_2: str):
        register_project_developer(with_validator, wallet_1, wallet_2, "Solar").expect_ok()

        assert register_project_developer(with_validator, wallet_1, wallet_2, "").expect_err() == ErrorKind.INVALID_INPUT

    def test_project_names_need_not_be_unique(self, with_validator: RegistryState, wallet_1: str, wallet_2: str, wallet_3: str):
        register_project_developer(with_validator, wallet_1, wallet_2, "Solar").expect_ok()

        assert register_project_developer(with_validator, wallet_1, wallet_3, "Solar").expect_ok() is True

    def test_developers_survive_validator_revocation(self, with_validator: RegistryState, deployer: str, wallet_1: str, wallet_2: str):
        register_project_developer(with_validator, wallet_1, wallet_2, "Solar").expect_ok()
        revoke_validator(with_validator, deployer, wallet_1).expect_ok()

        assert get_developer(with_validator, wallet_2) is not None
        assert get_validator_for(with_validator, wallet_2) == wallet_1


class TestProjectNamePolicy:
    """Tests for validate_project_name."""

    def test_boundary_length(self):
        policy = RegistryPolicy()
        assert validate_project_name("x" * 256, policy) is True
        assert validate_project_name("x" * 257, policy) is False

    def test_unicode_allowed_when_ascii_only_is_off(self):
        policy = RegistryPolicy(project_name_ascii_only=False)
        assert validate_project_name("café", policy) is True

    def test_non_string_rejected(self):
        assert validate_project_name(42, RegistryPolicy()) is False


class TestDevelopersRegisteredBy:
    """Tests for get_developers_registered_by."""

    def test_lists_in_registration_order(self, with_validator: RegistryState, wallet_1: str, wallet_2: str, wallet_3: str):
        register_project_developer(with_validator, wallet_1, wallet_3, "Wind").expect_ok()
        register_project_developer(with_validator, wallet_1, wallet_2, "Solar").expect_ok()

        developers = get_developers_registered_by(with_validator, wallet_1).expect_ok()

        assert [d.principal for d in developers] == [wallet_3, wallet_2]

    def test_validator_without_developers(self, with_validator: RegistryState, wallet_1: str):
        assert get_developers_registered_by(with_validator, wallet_1).expect_ok() == []

    def test_unknown_validator(self, state: RegistryState, wallet_1: str):
        assert get_developers_registered_by(state, wallet_1).expect_err() == ErrorKind.NOT_FOUND

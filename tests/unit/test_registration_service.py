"""
Unit tests for RegistrationService domain logic.

Tests domain logic with fake and mocked ports to verify:
- Validation runs before any side effect
- Password hashing
- Timestamping from the injected clock
- Persistence and id assignment
- Error kind mapping
"""

from unittest.mock import Mock

import pytest

from src.domain.exceptions import InternalError, ValidationFailed
from src.domain.hashing import BcryptHasher
from src.domain.ports import RegistrationRequest, User
from src.domain.registration import RegistrationService


def alice(password: str = "secret1", confirmation: str = "secret1") -> RegistrationRequest:
    return RegistrationRequest(username="alice1", password=password, password_confirmation=confirmation)


class TestRegistrationFlow:
    """Tests for registration flow orchestration."""

    def test_register_returns_persisted_user(self, registration_service: RegistrationService) -> None:
        user = registration_service.register_user(alice())

        assert user.id > 0
        assert user.username == "alice1"

    def test_register_stores_user(
        self, registration_service: RegistrationService, repository
    ) -> None:
        user = registration_service.register_user(alice())

        assert repository.store_calls == 1
        assert repository.users[user.id].username == "alice1"

    def test_ids_increase_per_registration(self, registration_service: RegistrationService) -> None:
        first = registration_service.register_user(alice())
        second = registration_service.register_user(
            RegistrationRequest(username="bob22", password="secret2", password_confirmation="secret2")
        )

        assert second.id > first.id

    def test_timestamps_come_from_clock(self, registration_service: RegistrationService, clock) -> None:
        user = registration_service.register_user(alice())

        assert user.created_at == clock.now()
        assert user.updated_at == clock.now()


class TestPasswordHashing:
    """Tests for password hashing during registration."""

    def test_password_is_hashed(self, registration_service: RegistrationService) -> None:
        user = registration_service.register_user(alice())

        assert user.password != "secret1"
        assert user.password.startswith("$2")

    def test_stored_hash_matches_plaintext(
        self, registration_service: RegistrationService, hasher: BcryptHasher, repository
    ) -> None:
        user = registration_service.register_user(alice())

        hasher.compare(repository.users[user.id].password, "secret1")

    def test_hasher_failure_is_internal(self, repository, clock) -> None:
        validator = Mock()
        hasher = Mock()
        hasher.hash.side_effect = RuntimeError("engine exploded")
        service = RegistrationService(validator=validator, clock=clock, hasher=hasher, users=repository)

        with pytest.raises(InternalError) as exc_info:
            service.register_user(alice())

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert repository.store_calls == 0


class TestValidationBeforeSideEffects:
    """No hashing or store write happens unless validation passes."""

    def test_mismatched_confirmation_writes_nothing(
        self, registration_service: RegistrationService, repository
    ) -> None:
        with pytest.raises(ValidationFailed) as exc_info:
            registration_service.register_user(alice(confirmation="secret2"))

        assert exc_info.value == ValidationFailed("password", "eqfield=password_confirmation")
        assert repository.store_calls == 0

    def test_validation_failure_skips_hashing(self, repository, clock) -> None:
        validator = Mock()
        validator.validate.side_effect = ValidationFailed("username", "min=3")
        hasher = Mock()
        service = RegistrationService(validator=validator, clock=clock, hasher=hasher, users=repository)

        with pytest.raises(ValidationFailed):
            service.register_user(alice())

        hasher.hash.assert_not_called()
        assert repository.store_calls == 0

    def test_duplicate_username_fails_unique(
        self, registration_service: RegistrationService, repository
    ) -> None:
        registration_service.register_user(alice())

        with pytest.raises(ValidationFailed) as exc_info:
            registration_service.register_user(alice(password="different1", confirmation="different1"))

        assert exc_info.value == ValidationFailed("username", "unique")
        assert repository.store_calls == 1

    def test_short_username_reported_before_uniqueness(
        self, registration_service: RegistrationService, repository
    ) -> None:
        with pytest.raises(ValidationFailed) as exc_info:
            registration_service.register_user(
                RegistrationRequest(username="ab", password="secret1", password_confirmation="secret1")
            )

        assert exc_info.value == ValidationFailed("username", "min=3")
        assert repository.lookup_calls == 0

    def test_password_over_bcrypt_limit_is_validation_failure(
        self, registration_service: RegistrationService, repository
    ) -> None:
        with pytest.raises(ValidationFailed) as exc_info:
            registration_service.register_user(alice(password="x" * 80, confirmation="x" * 80))

        assert exc_info.value == ValidationFailed("password", "max=72")
        assert repository.store_calls == 0


class TestStoreFailures:
    """Tests for persistence failure mapping."""

    def _service(self, users: Mock, clock) -> RegistrationService:
        return RegistrationService(
            validator=Mock(), clock=clock, hasher=BcryptHasher(cost=4), users=users
        )

    def test_store_internal_error_propagates(self, clock) -> None:
        users = Mock()
        users.store_user.side_effect = InternalError("storing user")

        with pytest.raises(InternalError):
            self._service(users, clock).register_user(alice())

    def test_unexpected_store_error_becomes_internal(self, clock) -> None:
        users = Mock()
        users.store_user.side_effect = TimeoutError()

        with pytest.raises(InternalError):
            self._service(users, clock).register_user(alice())

    def test_race_lost_at_insert_is_unique_failure(self, clock) -> None:
        """Store-level unique violation surfaces as the same validation failure."""
        users = Mock()
        users.store_user.side_effect = ValidationFailed("username", "unique")

        with pytest.raises(ValidationFailed) as exc_info:
            self._service(users, clock).register_user(alice())

        assert exc_info.value.rule == "unique"

    def test_store_receives_unpersisted_user(self, clock) -> None:
        users = Mock()

        def assign_id(user: User) -> None:
            assert user.id == 0
            user.id = 42

        users.store_user.side_effect = assign_id

        user = self._service(users, clock).register_user(alice())

        assert user.id == 42

"""Tests for the neo-rbac exception hierarchy."""

import pytest

from neo_rbac.core.exceptions import (
    NeoRBACError,
    InvalidArgumentError,
    InvalidNameError,
    PolicyIntegrityError,
    ForbiddenError,
    ConflictError,
    DuplicateItemError,
    SelfGrantError,
    StorageBindingError,
    NotFoundError,
    ItemNotFoundError,
    GrantNotFoundError,
    StorageError,
    StorageConnectionError,
    StorageSerializationError,
    get_http_status_code,
    create_error_response,
)


class TestNeoRBACError:
    """Test the base exception."""

    def test_defaults(self):
        error = NeoRBACError("Something failed")

        assert str(error) == "Something failed"
        assert error.message == "Something failed"
        assert error.error_code == "NeoRBACError"
        assert error.details == {}

    def test_error_code_defaults_to_class_name(self):
        error = ItemNotFoundError("missing", details={"name": "admin"})

        assert error.error_code == "ItemNotFoundError"
        assert error.details == {"name": "admin"}

    def test_explicit_error_code(self):
        error = ForbiddenError("nope", error_code="SUPER_ROLE_LOCKED")
        assert error.error_code == "SUPER_ROLE_LOCKED"


class TestHierarchy:
    """Test that the error kinds group the concrete classes."""

    @pytest.mark.parametrize("klass,parent", [
        (InvalidNameError, InvalidArgumentError),
        (PolicyIntegrityError, InvalidArgumentError),
        (DuplicateItemError, ConflictError),
        (SelfGrantError, ConflictError),
        (StorageBindingError, ConflictError),
        (ItemNotFoundError, NotFoundError),
        (GrantNotFoundError, NotFoundError),
        (StorageConnectionError, StorageError),
        (StorageSerializationError, StorageError),
        (StorageError, NeoRBACError),
        (ForbiddenError, NeoRBACError),
    ])
    def test_subclass(self, klass, parent):
        assert issubclass(klass, parent)


class TestHttpMapping:
    """Test HTTP status translation."""

    @pytest.mark.parametrize("error,status", [
        (InvalidArgumentError("x"), 400),
        (InvalidNameError("x"), 400),
        (ForbiddenError("x"), 403),
        (ItemNotFoundError("x"), 404),
        (GrantNotFoundError("x"), 404),
        (DuplicateItemError("x"), 409),
        (SelfGrantError("x"), 409),
        (StorageError("x"), 500),
        (StorageSerializationError("x"), 500),
        (StorageConnectionError("x"), 503),
        (NeoRBACError("x"), 500),
        (ValueError("x"), 500),
    ])
    def test_status_codes(self, error, status):
        assert get_http_status_code(error) == status

    def test_create_error_response(self):
        error = SelfGrantError("Role admin can not be granted to itself", details={"role": "admin"})

        response = create_error_response(error)

        assert response == {
            "error": {
                "code": "SelfGrantError",
                "message": "Role admin can not be granted to itself",
                "details": {"role": "admin"},
                "type": "SelfGrantError",
            }
        }


class TestPolicyIntegrityError:
    """Test the collected policy error."""

    def test_errors_are_listed(self):
        errors = [
            {"type": "RESOURCE_DNE", "role": "user", "grant": "read_ghost", "message": "Resource 'ghost' missing"},
            {"type": "ROLE_DNE", "role": "user", "grant": "boss", "message": "Role 'boss' missing"},
        ]

        error = PolicyIntegrityError("Incorrect rules", errors=errors)

        assert error.errors == errors
        assert error.details == {"errors": errors}
        assert str(error) == "Incorrect rules\n  - Resource 'ghost' missing\n  - Role 'boss' missing"

    def test_without_errors(self):
        error = PolicyIntegrityError("Incorrect rules")

        assert error.errors == []
        assert str(error) == "Incorrect rules"

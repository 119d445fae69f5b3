"""
Tests for the validation entry point.

Covers call-shape errors, dispatch per collection, aggregation of field
and referential errors, idempotence and the completion log event.
"""

import logging

import pytest

from propertyhub_backend.core.exceptions import CallError
from propertyhub_backend.modules.validation import services
from propertyhub_backend.modules.validation.schemas import ValidationRequest


def request(collection="users", data=None, operation="create"):
    return ValidationRequest(collection=collection, data=data, operation=operation)


class TestCallShape:
    """Test suite for rejected calls"""

    async def test_unauthenticated(self, repository, identity, valid_user):
        with pytest.raises(CallError) as exc_info:
            await services.validate_data(
                request(data=valid_user), None, repository, identity
            )

        assert exc_info.value.code == "unauthenticated"
        assert exc_info.value.status_code == 401

    @pytest.mark.parametrize(
        "payload",
        [
            ValidationRequest(data={"a": 1}, operation="create"),
            ValidationRequest(collection="users", operation="create"),
            ValidationRequest(collection="users", data={"a": 1}),
            ValidationRequest(collection="", data={"a": 1}, operation="create"),
        ],
    )
    async def test_missing_parts(self, payload, caller, repository, identity):
        with pytest.raises(CallError) as exc_info:
            await services.validate_data(payload, caller, repository, identity)

        assert exc_info.value.code == "invalid-argument"
        assert exc_info.value.message == "Collection, data, and operation are required"

    async def test_unknown_collection(self, caller, repository, identity):
        with pytest.raises(CallError) as exc_info:
            await services.validate_data(
                request(collection="invoices", data={"x": 1}), caller, repository, identity
            )

        assert exc_info.value.code == "invalid-argument"
        assert exc_info.value.message == "Invalid collection name"

    async def test_unknown_operation(self, caller, repository, identity, valid_user):
        with pytest.raises(CallError) as exc_info:
            await services.validate_data(
                request(data=valid_user, operation="delete"), caller, repository, identity
            )

        assert exc_info.value.code == "invalid-argument"
        assert exc_info.value.message == "Invalid operation"

    async def test_data_must_be_an_object(self, caller, repository, identity):
        with pytest.raises(CallError) as exc_info:
            await services.validate_data(
                request(data=["not", "a", "record"]), caller, repository, identity
            )

        assert exc_info.value.code == "invalid-argument"

    async def test_unexpected_failure_is_internal(
        self, caller, repository, identity, valid_user, monkeypatch
    ):
        def broken(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(services, "validate_user_fields", broken)

        with pytest.raises(CallError) as exc_info:
            await services.validate_data(request(data=valid_user), caller, repository, identity)

        assert exc_info.value.code == "internal"
        assert exc_info.value.message == "Data validation failed"
        assert exc_info.value.status_code == 500


class TestUsers:
    """Test suite for user validation through the entry point"""

    async def test_valid_user(self, caller, repository, identity, valid_user):
        result = await services.validate_data(
            request(data=valid_user), caller, repository, identity
        )

        assert result.valid is True
        assert result.to_response().model_dump(exclude_none=True) == {"valid": True}

    async def test_missing_email_named(self, caller, repository, identity, valid_user):
        del valid_user["email"]
        result = await services.validate_data(
            request(data=valid_user), caller, repository, identity
        )

        assert result.valid is False
        assert "Email is required" in result.messages

    async def test_duplicate_email_on_create(self, caller, repository, identity, valid_user):
        valid_user["email"] = "taken@example.com"
        result = await services.validate_data(
            request(data=valid_user), caller, repository, identity
        )

        assert result.messages == ["Email already exists"]

    async def test_uniqueness_not_checked_on_update(self, caller, repository, identity):
        result = await services.validate_data(
            request(data={"email": "taken@example.com"}, operation="update"),
            caller,
            repository,
            identity,
        )

        assert result.valid is True

    async def test_field_errors_precede_referential_errors(
        self, caller, repository, identity
    ):
        data = {"email": "taken@example.com", "name": "A", "role": "tenant"}
        result = await services.validate_data(request(data=data), caller, repository, identity)

        assert result.messages == [
            "Name must be between 2 and 100 characters",
            "Email already exists",
        ]

    async def test_identity_failure_fails_closed(
        self, caller, repository, failing_identity, valid_user
    ):
        result = await services.validate_data(
            request(data=valid_user), caller, repository, failing_identity
        )

        assert result.messages == ["Error checking email uniqueness"]


class TestProperties:
    """Test suite for property validation through the entry point"""

    async def test_valid_property(
        self, caller, repository, identity, valid_property, fixed_clock
    ):
        result = await services.validate_data(
            request("properties", valid_property), caller, repository, identity, fixed_clock
        )

        assert result.valid is True
        assert result.errors == []

    async def test_future_purchase_date(
        self, caller, repository, identity, valid_property, fixed_clock
    ):
        valid_property["purchaseDate"] = "2030-01-01"
        result = await services.validate_data(
            request("properties", valid_property), caller, repository, identity, fixed_clock
        )

        assert result.messages == ["Purchase date cannot be in the future"]

    @pytest.mark.parametrize("value", [0, -100, "150000"])
    async def test_non_positive_value(
        self, caller, repository, identity, valid_property, fixed_clock, value
    ):
        valid_property["value"] = value
        result = await services.validate_data(
            request("properties", valid_property), caller, repository, identity, fixed_clock
        )

        assert result.messages == ["Property value must be a positive number"]

    async def test_tenant_cannot_own_property(
        self, caller, repository, identity, valid_property, fixed_clock
    ):
        valid_property["ownerId"] = "tenant-1"
        result = await services.validate_data(
            request("properties", valid_property), caller, repository, identity, fixed_clock
        )

        assert result.messages == ["Assigned user must have owner or admin role"]

    async def test_unknown_owner(
        self, caller, repository, identity, valid_property, fixed_clock
    ):
        valid_property["ownerId"] = "ghost"
        result = await services.validate_data(
            request("properties", valid_property), caller, repository, identity, fixed_clock
        )

        assert result.messages == ["Owner does not exist"]

    async def test_store_outage_reported_separately(
        self, caller, failing_repository, identity, valid_property, fixed_clock
    ):
        result = await services.validate_data(
            request("properties", valid_property),
            caller,
            failing_repository,
            identity,
            fixed_clock,
        )

        assert result.messages == ["Error validating owner"]
        assert result.errors[0].code == "lookup_failed"

    async def test_repeated_validation_is_idempotent(
        self, caller, repository, identity, valid_property, fixed_clock
    ):
        valid_property["value"] = -1
        valid_property["ownerId"] = "tenant-1"
        first = await services.validate_data(
            request("properties", valid_property), caller, repository, identity, fixed_clock
        )
        second = await services.validate_data(
            request("properties", valid_property), caller, repository, identity, fixed_clock
        )

        assert first == second
        assert first.valid is False


class TestDocuments:
    """Test suite for document validation through the entry point"""

    async def test_valid_document(self, caller, repository, identity, valid_document):
        result = await services.validate_data(
            request("documents", valid_document), caller, repository, identity
        )

        assert result.valid is True

    async def test_invalid_type_lists_allowed_set(
        self, caller, repository, identity, valid_document
    ):
        valid_document["type"] = "receipt"
        result = await services.validate_data(
            request("documents", valid_document), caller, repository, identity
        )

        message = result.messages[0]
        for document_type in ("deed", "contract", "inspection", "insurance", "tax", "other"):
            assert document_type in message

    async def test_both_references_checked(self, caller, repository, identity, valid_document):
        valid_document["propertyId"] = "nowhere"
        valid_document["ownerId"] = "ghost"
        result = await services.validate_data(
            request("documents", valid_document), caller, repository, identity
        )

        assert result.messages == ["Property does not exist", "Owner does not exist"]

    async def test_document_owner_role_not_restricted(
        self, caller, repository, identity, valid_document
    ):
        valid_document["ownerId"] = "tenant-1"
        result = await services.validate_data(
            request("documents", valid_document), caller, repository, identity
        )

        assert result.valid is True


class TestCompletionEvent:
    """Test suite for the structured completion log"""

    async def test_event_logged(self, caller, repository, identity, caplog):
        with caplog.at_level(logging.INFO):
            await services.validate_data(
                request(data={"email": "bad"}, operation="update"),
                caller,
                repository,
                identity,
            )

        events = [r for r in caplog.records if getattr(r, "event", None) == "data_validation_completed"]
        assert len(events) == 1
        assert events[0].context == {
            "collection": "users",
            "operation": "update",
            "uid": "admin-1",
            "valid": False,
            "error_count": 1,
        }


def test_describe_schemas():
    catalog = services.describe_schemas()

    assert catalog.collections == ["users", "properties", "documents"]
    assert catalog.operations == ["create", "update"]
    assert catalog.enums["users.role"] == ["admin", "owner", "tenant"]

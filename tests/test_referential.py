"""
Tests for referential checks against the record store and identity provider.
"""

import logging

from propertyhub_backend.modules.validation import referential


class TestOwnerChecks:
    """Test suite for owner existence and role checks"""

    async def test_existing_owner(self, repository):
        assert await referential.check_owner_exists(repository, "owner-1") is None

    async def test_missing_owner(self, repository):
        error = await referential.check_owner_exists(repository, "ghost")

        assert error.message == "Owner does not exist"
        assert error.code == "not_found"
        assert error.field == "ownerId"

    async def test_property_owner_accepts_owner_and_admin(self, repository):
        assert await referential.check_property_owner(repository, "owner-1") is None
        assert await referential.check_property_owner(repository, "admin-1") is None

    async def test_property_owner_rejects_tenant(self, repository):
        error = await referential.check_property_owner(repository, "tenant-1")
        assert error.message == "Assigned user must have owner or admin role"

    async def test_property_owner_missing(self, repository):
        error = await referential.check_property_owner(repository, "ghost")
        assert error.message == "Owner does not exist"

    async def test_lookup_failure_is_distinct_from_not_found(
        self, failing_repository, caplog
    ):
        with caplog.at_level(logging.WARNING):
            error = await referential.check_property_owner(failing_repository, "owner-1")

        assert error.message == "Error validating owner"
        assert error.code == "lookup_failed"
        assert any(record.getMessage() == "Error validating owner" for record in caplog.records)

    def test_owner_role_without_role_field(self):
        error = referential.check_owner_role({"email": "x@example.com"})
        assert error.code == "invalid_role"


class TestPropertyChecks:
    """Test suite for property existence"""

    async def test_existing_property(self, repository):
        assert await referential.check_property_exists(repository, "property-1") is None
        assert ("properties", "property-1") in repository.calls

    async def test_missing_property(self, repository):
        error = await referential.check_property_exists(repository, "nowhere")
        assert error.message == "Property does not exist"
        assert error.field == "propertyId"

    async def test_lookup_failure(self, failing_repository):
        error = await referential.check_property_exists(failing_repository, "property-1")
        assert error.message == "Error validating property"
        assert error.code == "lookup_failed"


class TestEmailUniqueness:
    """Test suite for email uniqueness"""

    async def test_unknown_email_is_unique(self, identity):
        assert await referential.check_email_unique(identity, "fresh@example.com") is None

    async def test_known_email_is_duplicate(self, identity):
        error = await referential.check_email_unique(identity, "taken@example.com")
        assert error.message == "Email already exists"
        assert error.code == "duplicate"

    async def test_provider_failure_fails_closed(self, failing_identity):
        error = await referential.check_email_unique(failing_identity, "fresh@example.com")
        assert error.message == "Error checking email uniqueness"
        assert error.field == "email"

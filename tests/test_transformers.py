"""
Tests for store/model/form transformers.
"""

import json
import logging
from datetime import datetime, timezone

from propertyhub_backend.modules.documents import transformers as document_transformers
from propertyhub_backend.modules.documents.schemas import (
    DocumentFileInfo,
    DocumentFormData,
    DocumentType,
)
from propertyhub_backend.modules.properties import transformers as property_transformers
from propertyhub_backend.modules.properties.schemas import PropertyFormData
from propertyhub_backend.modules.users import transformers as user_transformers
from propertyhub_backend.modules.users.schemas import User, UserFormData, UserRole

CREATED = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
CREATED_ISO = "2024-01-15T10:30:00Z"


class TestUserTransformers:
    """Test suite for user conversions"""

    def test_round_trip(self):
        record = {
            "id": "u1",
            "email": "jane@example.com",
            "name": "Jane Doe",
            "role": "owner",
            "phone": "(555) 123-4567",
            "isActive": False,
            "createdAt": CREATED_ISO,
        }

        assert user_transformers.to_store(user_transformers.from_store(record)) == record

    def test_stored_record_is_json_serialisable(self):
        user = User(email="jane@example.com", created_at=CREATED, last_login_at=CREATED)
        stored = user_transformers.to_store(user)

        assert json.loads(json.dumps(stored))["lastLoginAt"] == CREATED_ISO

    def test_malformed_timestamp_degrades_to_none(self):
        user = user_transformers.from_store({"id": "u1", "createdAt": "yesterday", "lastLoginAt": 17})

        assert user.created_at is None
        assert user.last_login_at is None

    def test_stored_timestamp_is_parsed(self):
        assert user_transformers.from_store({"createdAt": CREATED_ISO}).created_at == CREATED

    def test_is_active_defaults_to_true(self):
        record = {"id": "u1", "email": "jane@example.com", "name": "Jane", "role": "tenant"}
        stored = user_transformers.to_store(user_transformers.from_store(record))

        assert stored == {**record, "isActive": True}

    def test_unknown_role_falls_back_to_tenant(self, caplog):
        with caplog.at_level(logging.WARNING):
            user = user_transformers.from_store({"id": "u1", "role": "superuser"})

        assert user.role == UserRole.TENANT.value
        assert any(r.getMessage() == "Unknown enum value coerced" for r in caplog.records)

    def test_role_case_is_normalised(self):
        assert user_transformers.from_store({"role": "Admin"}).role == "admin"

    def test_from_form_trims_and_lowercases_email(self):
        form = UserFormData(
            name="  Jane Doe ",
            email="  Jane@Example.COM ",
            role="owner",
            phone="",
            password="secret",
            confirm_password="secret",
        )
        payload = user_transformers.from_form(form)

        assert payload.email == "jane@example.com"
        assert payload.name == "Jane Doe"
        assert payload.phone is None

    def test_passwords_never_stored(self):
        form = UserFormData(name="Jane", email="j@example.com", role="owner", password="x", confirm_password="x")
        stored = user_transformers.to_store(user_transformers.from_form(form))

        assert "password" not in stored
        assert "confirmPassword" not in stored

    def test_to_form_blanks_passwords(self):
        form = user_transformers.to_form(User(email="j@example.com", name="Jane", role="admin"))

        assert form.password == ""
        assert form.confirm_password == ""
        assert form.role == "admin"
        assert form.phone == ""
        assert form.is_active is True

    def test_batch(self):
        users = user_transformers.users_from_store([{"id": "a"}, {"id": "b"}])
        assert [user.id for user in users] == ["a", "b"]


class TestPropertyTransformers:
    """Test suite for property conversions"""

    def test_round_trip(self):
        record = {
            "id": "p1",
            "address": "Calle Mayor 12, Madrid",
            "type": "commercial",
            "ownerId": "owner-1",
            "value": 250000,
            "purchaseDate": "2020-03-01",
            "isActive": True,
            "features": ["parking"],
        }

        assert property_transformers.to_store(property_transformers.from_store(record)) == record

    def test_missing_features_default_to_empty(self):
        prop = property_transformers.from_store({"id": "p1", "features": None})
        assert prop.features == []

    def test_malformed_numbers_degrade_to_none(self):
        prop = property_transformers.from_store(
            {
                "id": "p1",
                "value": "n/a",
                "bedrooms": "three",
                "bathrooms": 1.5,
                "squareMeters": "78.5",
                "yearBuilt": 1998.0,
                "purchaseDate": 20200301,
                "updatedAt": "not a date",
            }
        )

        assert prop.value is None
        assert prop.bedrooms is None
        assert prop.bathrooms is None
        assert prop.square_meters == 78.5
        assert prop.year_built == 1998
        assert prop.purchase_date is None
        assert prop.updated_at is None

    def test_batch_survives_malformed_records(self):
        props = property_transformers.properties_from_store(
            [{"id": "good", "value": 100000}, {"id": "bad", "value": "n/a", "createdAt": "yesterday"}]
        )

        assert [prop.id for prop in props] == ["good", "bad"]
        assert props[1].value is None

    def test_unknown_type_falls_back_to_residential(self):
        assert property_transformers.from_store({"type": "castle"}).type == "residential"

    def test_from_form_parses_numbers(self):
        form = PropertyFormData(
            address=" Calle Mayor 12 ",
            type="residential",
            owner_id="owner-1",
            value="185000.50",
            bedrooms="3",
            bathrooms="two",
            square_meters="",
            year_built="1998",
            features=[" pool ", "", "garden"],
        )
        payload = property_transformers.from_form(form)

        assert payload.address == "Calle Mayor 12"
        assert payload.value == 185000.5
        assert payload.bedrooms == 3
        assert payload.bathrooms is None
        assert payload.square_meters is None
        assert payload.year_built == 1998
        assert payload.features == ["pool", "garden"]

    def test_to_form_encodes_numbers(self):
        prop = property_transformers.from_store(
            {"address": "Calle Mayor 12", "value": 250000, "squareMeters": 78.5}
        )
        form = property_transformers.to_form(prop)

        assert form.value == "250000"
        assert form.square_meters == "78.5"
        assert form.bedrooms == ""
        assert form.tenant_id == ""


class TestDocumentTransformers:
    """Test suite for document conversions"""

    def test_round_trip(self):
        record = {
            "id": "d1",
            "name": "Purchase deed",
            "type": "deed",
            "propertyId": "property-1",
            "ownerId": "owner-1",
            "uploadDate": CREATED_ISO,
            "fileSize": 2048,
            "mimeType": "application/pdf",
            "driveFileId": "drive-1",
            "isActive": True,
            "tags": ["legal"],
            "version": 3,
        }

        assert document_transformers.to_store(document_transformers.from_store(record)) == record

    def test_defaults(self):
        document = document_transformers.from_store({"id": "d1", "type": "memo"})

        assert document.tags == []
        assert document.version == 1
        assert document.type == DocumentType.OTHER.value

    def test_legacy_file_size_string(self):
        document = document_transformers.from_store({"fileSize": "2.5 MB"})
        assert document.file_size == int(2.5 * 1024 * 1024)

    def test_to_store_leaves_upload_date_unset(self):
        document = document_transformers.from_store({"id": "d1", "name": "Deed"})
        stored = document_transformers.to_store(document)

        assert "uploadDate" not in stored
        assert stored["isActive"] is True
        assert stored["version"] == 1

    def test_malformed_version_and_dates(self):
        document = document_transformers.from_store(
            {"version": "v2", "fileSize": True, "uploadDate": "last week"}
        )

        assert document.version == 1
        assert document.file_size is None
        assert document.upload_date is None

    def test_from_form_merges_file_info(self):
        form = DocumentFormData(name=" Lease ", type="contract", property_id="property-1", tags=["a", " "])
        info = DocumentFileInfo(
            file_size=1024, mime_type="application/pdf", drive_file_id="drive-9", owner_id="owner-1"
        )
        payload = document_transformers.from_form(form, info, now=CREATED)

        assert payload.name == "Lease"
        assert payload.owner_id == "owner-1"
        assert payload.drive_file_id == "drive-9"
        assert payload.tags == ["a"]
        assert payload.upload_date == CREATED
        assert document_transformers.to_store(payload)["uploadDate"] == CREATED_ISO

    def test_batch(self):
        documents = document_transformers.documents_from_store([{"id": "x"}])
        assert documents[0].id == "x"

"""
Tests for Schema: root validation, retained-payload state machine, controlled
data access and structural description.
"""
import pytest

from rest_schema import (
    AccessError,
    DEFAULT_SCHEMA_DESCRIPTION,
    FieldType,
    ListField,
    ObjectField,
    ScalarField,
    Schema,
    SchemaDefinitionError,
    ValidatedData,
    ValidationError,
)


class TestSchemaValidation:
    def test_valid_payload_is_accepted(self, person_schema):
        result = person_schema.validate({"name": "John", "age": 30})
        assert result is person_schema
        assert person_schema.full_data() == {"name": "John", "age": 30}

    def test_invalid_property_is_reported(self, person_schema):
        with pytest.raises(ValidationError, match="In property name: Expected string, got number") as exc_info:
            person_schema.validate({"name": 123, "age": 30})
        assert exc_info.value.property == "name"

    def test_complex_object(self, user_schema, valid_user):
        user_schema.validate(valid_user)

        with pytest.raises(ValidationError, match="In property age"):
            user_schema.validate({**valid_user, "age": "30"})

    def test_nested_failure_path(self, user_schema, valid_user):
        with pytest.raises(ValidationError) as exc_info:
            user_schema.validate({**valid_user, "address": {"street": 1}})
        assert str(exc_info.value) == (
            "In property address: In property street: Expected string, got number. "
            "Field description: Street Address. Object description: No description available"
        )

    def test_list_failure_path(self, user_schema, valid_user):
        with pytest.raises(ValidationError, match=r"^In property tags: In list: Expected string, got number"):
            user_schema.validate({**valid_user, "tags": ["ok", 7]})

    def test_first_declared_property_is_blamed(self, user_schema):
        with pytest.raises(ValidationError) as exc_info:
            user_schema.validate({"age": "old", "name": 1})
        assert exc_info.value.property == "name"

    def test_missing_required_property(self, person_schema):
        with pytest.raises(ValidationError, match="In property name: Expected string, got undefined"):
            person_schema.validate({"age": 30})

    def test_undeclared_keys_are_ignored(self, person_schema):
        person_schema.validate({"name": "John", "nickname": 5})
        assert person_schema.full_data()["nickname"] == 5

    def test_empty_schema_accepts_empty_object(self):
        schema = Schema({})
        assert schema.validate({}) is schema
        description = schema.describe_schema()
        assert description["type"] == "object"
        assert description["properties"] == {}
        assert description["required"] == []

    @pytest.mark.parametrize("payload, kind", [([], "array"), ("text", "string"), (None, "null")])
    def test_non_mapping_root_is_rejected(self, person_schema, payload, kind):
        with pytest.raises(ValidationError, match=f"Expected an key-value object, got {kind}"):
            person_schema.validate(payload)

    def test_non_field_member_is_rejected(self):
        with pytest.raises(SchemaDefinitionError):
            Schema({"name": FieldType.STRING})


class TestSchemaState:
    def test_access_before_validate_fails(self, person_schema):
        assert not person_schema.is_validated
        with pytest.raises(AccessError, match="Must call an error free"):
            person_schema.full_data()
        with pytest.raises(AccessError):
            person_schema.data()

    def test_failed_validate_keeps_previous_payload(self, person_schema):
        person_schema.validate({"name": "John", "age": 30})
        with pytest.raises(ValidationError):
            person_schema.validate({"name": 1})
        assert person_schema.full_data() == {"name": "John", "age": 30}

    def test_failed_first_validate_stores_nothing(self, person_schema):
        with pytest.raises(ValidationError):
            person_schema.validate({"name": 1})
        assert not person_schema.is_validated

    def test_clear_then_revalidate(self, person_schema):
        person_schema.validate({"name": "John", "age": 30})
        person_schema.clear()
        with pytest.raises(AccessError):
            person_schema.full_data()
        with pytest.raises(AccessError):
            person_schema.data()

        person_schema.validate({"name": "Jane", "age": 41})
        assert person_schema.full_data() == {"name": "Jane", "age": 41}
        assert person_schema.data()["name"] == "Jane"

    def test_new_validate_overwrites_payload(self, person_schema):
        person_schema.validate({"name": "John"})
        person_schema.validate({"name": "Jane"})
        assert person_schema.data().name == "Jane"

    def test_full_data_is_a_copy(self, person_schema):
        payload = {"name": "John", "age": 30}
        person_schema.validate(payload)
        payload["name"] = "Changed"
        copy = person_schema.full_data()
        copy["age"] = 99
        assert person_schema.full_data() == {"name": "John", "age": 30}

    def test_validate_data_is_stateless(self, person_schema):
        payload = {"name": "John", "age": 30}
        result = person_schema.validate_data(payload)
        assert result == payload
        assert result is not payload
        assert not person_schema.is_validated

    def test_validate_data_raises_the_same_errors(self, person_schema):
        with pytest.raises(ValidationError, match="In property name: Expected string, got number"):
            person_schema.validate_data({"name": 123})


class TestValidatedData:
    def test_item_and_attribute_access(self, person_schema):
        data = person_schema.validate({"name": "John", "age": 30}).data()
        assert isinstance(data, ValidatedData)
        assert data["name"] == "John"
        assert data.age == 30

    def test_undeclared_key_is_rejected(self, person_schema):
        data = person_schema.validate({"name": "John", "extra": 1}).data()
        with pytest.raises(AccessError, match="Property extra does not exist in the schema."):
            data["extra"]
        with pytest.raises(AccessError):
            data.extra

    def test_declared_but_absent_member_reads_none(self, person_schema):
        data = person_schema.validate({"name": "John"}).data()
        assert data["age"] is None

    def test_view_iterates_declared_members(self, person_schema):
        data = person_schema.validate({"name": "John", "age": 30, "extra": True}).data()
        assert list(data) == ["name", "age"]
        assert len(data) == 2
        assert dict(data) == {"name": "John", "age": 30}

    def test_view_is_read_only(self, person_schema):
        data = person_schema.validate({"name": "John"}).data()
        with pytest.raises(AccessError):
            data.name = "Jane"

    def test_view_follows_clear(self, person_schema):
        data = person_schema.validate({"name": "John"}).data()
        person_schema.clear()
        with pytest.raises(AccessError):
            data["name"]

    def test_membership_checks_declared_members(self, person_schema):
        data = person_schema.validate({"name": "John", "extra": 1}).data()
        assert "name" in data
        assert "age" in data
        assert "extra" not in data

    def test_membership_after_clear_is_rejected(self, person_schema):
        data = person_schema.validate({"name": "John"}).data()
        person_schema.clear()
        with pytest.raises(AccessError):
            "name" in data

    def test_members_named_like_mapping_methods(self):
        schema = Schema({
            "items": ListField(ScalarField(FieldType.NUMBER), True),
            "get": ScalarField(FieldType.STRING),
        })
        data = schema.validate({"items": [1, 2], "get": "all"}).data()
        assert data.items == [1, 2]
        assert data.get == "all"
        assert data["items"] == [1, 2]
        assert list(data.keys()) == ["items", "get"]


class TestSchemaDescription:
    def test_description_of_nested_schema(self, user_schema):
        description = user_schema.describe_schema()
        assert description["type"] == "object"
        assert description["description"] == "A registered user"
        assert description["required"] == ["name", "age"]
        assert description["properties"]["address"]["required"] == ["street"]
        assert description["properties"]["tags"]["items"]["type"] == "string"

    def test_default_description(self):
        assert Schema({}).describe_schema()["description"] == DEFAULT_SCHEMA_DESCRIPTION

    def test_description_is_a_copy(self, person_schema):
        description = person_schema.describe_schema()
        description["properties"]["name"]["type"] = "number"
        assert person_schema.describe_schema()["properties"]["name"]["type"] == "string"

    def test_required_object_member_is_listed(self):
        schema = Schema({"address": ObjectField({"street": ScalarField(FieldType.STRING)}, True)})
        assert schema.describe_schema()["required"] == ["address"]

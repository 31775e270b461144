import logging

import pytest

from dbvalidation.exceptions.base import (
    MalformedErrorText,
    SchemaLookupError,
    TemplateConfigurationError,
    UnsupportedErrorType,
)
from dbvalidation.translation.classifier import RawDatabaseError
from dbvalidation.translation.custom_rules import CustomRuleStore
from dbvalidation.translation.extractor import MessageExtractor
from dbvalidation.translation.schema_lookup import IndexInfo
from dbvalidation.translation.templates import MessageTemplate, TemplateRegistry

from ..test_fixtures.translator_fixtures import StubSchemaLookup, make_db_error

DUPLICATE_EMAIL = "Duplicate entry 'bob@x.com' for key 'users_email_unique'"


@pytest.fixture
def extractor(registry, rules) -> MessageExtractor:
    return MessageExtractor(registry, rules)


def test_null_violation(extractor):
    parsed = extractor.extract(RawDatabaseError(1048, "Column 'name' cannot be null"))

    assert parsed.code == 1048
    assert parsed.field_name == "name"
    assert parsed.parameters == {"attribute": "name"}
    assert parsed.message == "The name field is required."


def test_duplicate_key_resolves_field_through_schema_lookup(extractor, schema_lookup):
    parsed = extractor.extract(RawDatabaseError(1062, DUPLICATE_EMAIL))

    assert schema_lookup.calls == ["users_email_unique"]
    assert parsed.parameters["value"] == "bob@x.com"
    assert parsed.parameters["index_name"] == "users_email_unique"
    assert parsed.parameters["attribute"] == "email"
    assert parsed.parameters["table_name"] == "users"
    assert parsed.field_name == "email"
    assert parsed.message == "The email has already been taken."


def test_duplicate_key_on_composite_index(extractor):
    parsed = extractor.extract(RawDatabaseError(1062, "Duplicate entry 'Bob-Smith' for key 'users_name_unique'"))

    assert parsed.field_name == "first,last"
    assert parsed.fields == ["first", "last"]


def test_index_comment_replaces_default_message(extractor):
    parsed = extractor.extract(RawDatabaseError(1062, "Duplicate entry '555' for key 'users_phone_unique'"))

    assert parsed.field_name == "phone"
    assert parsed.message == "This phone number is already registered."


def test_index_comment_placeholders_are_substituted(rules):
    lookup = StubSchemaLookup({"users_phone_unique": IndexInfo("phone", "users", "The :attribute is taken in :table_name.")})
    extractor = MessageExtractor(TemplateRegistry(lookup=lookup), rules)

    parsed = extractor.extract(RawDatabaseError(1062, "Duplicate entry '555' for key 'users_phone_unique'"))

    assert parsed.message == "The phone is taken in users."


def test_data_too_long(extractor):
    parsed = extractor.extract(RawDatabaseError(1406, "Data too long for column 'bio' at row 1"))
    assert (parsed.field_name, parsed.message) == ("bio", "The bio is too long.")


def test_data_truncated_enum(extractor):
    parsed = extractor.extract(RawDatabaseError(1265, "Data truncated for column 'status' at row 1"))
    assert (parsed.field_name, parsed.message) == ("status", "The selected status is invalid.")


def test_wrong_value_type(extractor):
    parsed = extractor.extract(RawDatabaseError(1366, "Incorrect integer value: 'abc' for column 'age' at row 1"))
    assert (parsed.field_name, parsed.message) == ("age", "The age must be an integer type.")


@pytest.mark.parametrize(
    "code, text",
    [
        (1048, "Column 'name' cannot be null"),
        (1062, DUPLICATE_EMAIL),
        (1406, "Data too long for column 'bio' at row 12"),
        (1265, "Data truncated for column 'status' at row 2"),
        (1366, "Incorrect decimal value: '' for column 'price' at row 1"),
    ],
)
def test_every_supported_code_extracts_a_field(extractor, code, text):
    parsed = extractor.extract(RawDatabaseError(code, text))
    assert parsed.field_name
    assert ":" not in parsed.message


def test_accepts_sqlalchemy_errors(extractor):
    parsed = extractor.extract(make_db_error(1048, "Column 'name' cannot be null"))
    assert parsed.field_name == "name"


def test_unsupported_code(extractor, caplog):
    with caplog.at_level(logging.WARNING, logger="dbvalidation"):
        with pytest.raises(UnsupportedErrorType) as exc_info:
            extractor.extract(RawDatabaseError(9999, "Something went wrong"))

    assert exc_info.value.code == 9999
    assert any(r.getMessage() == "extractor.unsupported_code" for r in caplog.records)


def test_malformed_engine_text(extractor):
    with pytest.raises(MalformedErrorText) as exc_info:
        extractor.extract(RawDatabaseError(1048, "Field 'name' doesn't have a default value"))

    assert exc_info.value.code == 1048
    assert exc_info.value.pattern == "Column '(.*?)' cannot be null"


def test_unknown_index_fails_the_extraction(extractor):
    with pytest.raises(SchemaLookupError) as exc_info:
        extractor.extract(RawDatabaseError(1062, "Duplicate entry 'x' for key 'users_missing_unique'"))

    assert isinstance(exc_info.value, LookupError)
    assert exc_info.value.index_name == "users_missing_unique"


def test_lookup_crash_is_wrapped(rules):
    class BrokenLookup:
        def lookup_index(self, index_name):
            raise RuntimeError("connection reset")

    extractor = MessageExtractor(TemplateRegistry(lookup=BrokenLookup()), rules)

    with pytest.raises(SchemaLookupError) as exc_info:
        extractor.extract(RawDatabaseError(1062, DUPLICATE_EMAIL))

    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_duplicate_key_without_schema_lookup(rules):
    extractor = MessageExtractor(TemplateRegistry(), rules)

    with pytest.raises(SchemaLookupError):
        extractor.extract(RawDatabaseError(1062, DUPLICATE_EMAIL))


def test_first_matching_custom_rule_wins(registry):
    rules = CustomRuleStore()
    rules.register("first", 1062, "email")
    rules.register("second", 1062)
    extractor = MessageExtractor(registry, rules)

    assert extractor.extract(RawDatabaseError(1062, DUPLICATE_EMAIL)).message == "first"
    composite = extractor.extract(RawDatabaseError(1062, "Duplicate entry 'a-b' for key 'users_name_unique'"))
    assert composite.message == "second"


def test_custom_rules_match_the_resolved_field_not_the_index_name(registry):
    rules = CustomRuleStore()
    rules.register("by index", 1062, "users_email_unique")
    rules.register("by column", 1062, "email")
    extractor = MessageExtractor(registry, rules)

    assert extractor.extract(RawDatabaseError(1062, DUPLICATE_EMAIL)).message == "by column"


def test_custom_rule_overrides_index_comment(registry):
    rules = CustomRuleStore()
    rules.register("Custom phone message.", 1062, "phone")
    extractor = MessageExtractor(registry, rules)

    parsed = extractor.extract(RawDatabaseError(1062, "Duplicate entry '555' for key 'users_phone_unique'"))

    assert parsed.message == "Custom phone message."


def test_custom_rule_renames_field_and_substitutes(registry):
    rules = CustomRuleStore()
    rules.register("The :Attribute is missing.", 1048, "name", "full_name")
    extractor = MessageExtractor(registry, rules)

    parsed = extractor.extract(RawDatabaseError(1048, "Column 'name' cannot be null"))

    assert parsed.field_name == "full_name"
    assert parsed.message == "The Name is missing."


def test_custom_rule_for_other_field_is_ignored(registry):
    rules = CustomRuleStore()
    rules.register("nope", 1048, "email")
    extractor = MessageExtractor(registry, rules)

    assert extractor.extract(RawDatabaseError(1048, "Column 'name' cannot be null")).message == (
        "The name field is required."
    )


def test_template_can_choose_designator_parameter(rules):
    no_default = MessageTemplate(
        code=1364,
        pattern=r"Field '(.*?)' doesn't have a default value",
        message="The :column field is required.",
        params=("column",),
        field_param="column",
    )
    extractor = MessageExtractor(TemplateRegistry(extra_templates=[no_default]), rules)

    parsed = extractor.extract(RawDatabaseError(1364, "Field 'name' doesn't have a default value"))

    assert (parsed.field_name, parsed.message) == ("name", "The name field is required.")


def test_missing_designator_parameter_is_a_configuration_error(rules):
    no_default = MessageTemplate(
        code=1364,
        pattern=r"Field '(.*?)' doesn't have a default value",
        message="The :column field is required.",
        params=("column",),
    )
    extractor = MessageExtractor(TemplateRegistry(extra_templates=[no_default]), rules)

    with pytest.raises(TemplateConfigurationError):
        extractor.extract(RawDatabaseError(1364, "Field 'name' doesn't have a default value"))

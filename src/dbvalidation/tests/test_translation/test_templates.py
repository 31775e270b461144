import threading

import pytest

from dbvalidation.exceptions.base import TemplateConfigurationError
from dbvalidation.exceptions.error_codes import MySQLErrorCodes
from dbvalidation.translation.hooks import DuplicateKeyHook
from dbvalidation.translation.localization import DictLocalizer
from dbvalidation.translation.templates import MessageTemplate, TemplateRegistry


class CountingLocalizer(DictLocalizer):
    def __init__(self):
        super().__init__()
        self.calls: dict[str, int] = {}

    def get(self, key: str) -> str:
        self.calls[key] = self.calls.get(key, 0) + 1
        return super().get(key)


SAMPLES = [
    (1048, "Column 'name' cannot be null", {"attribute": "name"}),
    (
        1062,
        "Duplicate entry 'bob@x.com' for key 'users_email_unique'",
        {"value": "bob@x.com", "index_name": "users_email_unique"},
    ),
    (1406, "Data too long for column 'bio' at row 1", {"attribute": "bio", "rownum": "1"}),
    (1265, "Data truncated for column 'status' at row 3", {"attribute": "status", "rownum": "3"}),
    (
        1366,
        "Incorrect integer value: 'abc' for column 'age' at row 1",
        {"field_type": "integer", "value": "abc", "attribute": "age", "rownum": "1"},
    ),
]


def test_supported_codes():
    assert TemplateRegistry().supported_codes() == {1048, 1062, 1265, 1366, 1406}


@pytest.mark.parametrize("code, text, expected", SAMPLES)
def test_templates_parse_engine_text(code, text, expected):
    template = TemplateRegistry().get(code)
    assert template.parse(text) == expected


def test_parse_returns_none_when_text_does_not_match():
    template = TemplateRegistry().get(MySQLErrorCodes.ER_BAD_NULL_ERROR)
    assert template.parse("Field 'name' doesn't have a default value") is None


def test_pattern_is_searched_not_anchored():
    template = TemplateRegistry().get(1048)
    assert template.parse("SQLSTATE[23000]: Column 'name' cannot be null") == {"attribute": "name"}


def test_group_count_mismatch_is_a_configuration_error():
    with pytest.raises(TemplateConfigurationError):
        MessageTemplate(code=1048, pattern=r"Column '(.*?)' cannot be null", message="m", params=("a", "b"))


def test_only_duplicate_key_has_a_hook():
    templates = TemplateRegistry().get_templates()
    hooks = {code for code, template in templates.items() if template.post_process is not None}
    assert hooks == {1062}
    assert isinstance(templates[1062].post_process, DuplicateKeyHook)


def test_localized_default_messages():
    registry = TemplateRegistry(DictLocalizer({"required": "Le champ :attribute est obligatoire."}))
    assert registry.get(1048).message == "Le champ :attribute est obligatoire."
    assert registry.get(1406).message == "The :attribute is too long."


def test_templates_are_built_once():
    localizer = CountingLocalizer()
    registry = TemplateRegistry(localizer)

    first = registry.get_templates()
    second = registry.get_templates()

    assert first is second
    assert localizer.calls == {"required": 1, "unique": 1, "in": 1}


def test_concurrent_first_access_builds_once():
    localizer = CountingLocalizer()
    registry = TemplateRegistry(localizer)
    barrier = threading.Barrier(8)
    results = []

    def worker():
        barrier.wait()
        results.append(registry.get_templates())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 8
    assert all(r is results[0] for r in results)
    assert localizer.calls == {"required": 1, "unique": 1, "in": 1}


def test_templates_are_read_only():
    templates = TemplateRegistry().get_templates()
    with pytest.raises(TypeError):
        templates[9999] = templates[1048]


def test_extra_templates_extend_the_registry():
    fk = MessageTemplate(
        code=1452,
        pattern=r"FOREIGN KEY \(`(.*?)`\)",
        message="The selected :attribute is invalid.",
        params=("attribute",),
    )
    registry = TemplateRegistry(extra_templates=[fk])

    assert 1452 in registry.supported_codes()
    assert registry.get(1452) is fk


def test_unknown_or_missing_code():
    registry = TemplateRegistry()
    assert registry.get(9999) is None
    assert registry.get(None) is None


def test_extra_template_cannot_replace_a_builtin_code():
    shadow = MessageTemplate(
        code=1048,
        pattern=r"Field '(.*?)' doesn't have a default value",
        message="The :attribute field is required.",
        params=("attribute",),
    )
    registry = TemplateRegistry(extra_templates=[shadow])

    with pytest.raises(TemplateConfigurationError) as exc_info:
        registry.get_templates()

    assert exc_info.value.code == 1048


def test_two_extra_templates_with_the_same_code():
    def make(message):
        return MessageTemplate(code=1452, pattern=r"FOREIGN KEY \(`(.*?)`\)", message=message, params=("attribute",))

    registry = TemplateRegistry(extra_templates=[make("first"), make("second")])

    with pytest.raises(TemplateConfigurationError):
        registry.supported_codes()

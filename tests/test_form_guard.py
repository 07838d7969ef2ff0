import asyncio
import logging

import pytest

from adapters.locale_registry.in_memory_registry import (
    InMemoryLocaleRegistry,
    get_locale_registry,
    register_locale,
)
from adapters.validator.form_guard import FormGuard
from contracts import FileList, FileRef
from errors import InvalidPredicateError, LocaleNotRegisteredError
from ports.validator import Validator


def _guard(**options):
    options.setdefault("registry", InMemoryLocaleRegistry())
    return FormGuard(**options)


async def _later(verdict):
    await asyncio.sleep(0)
    return verdict


def test_form_guard_implements_validator_port():
    assert isinstance(_guard(), Validator)


def test_min_length_passes_on_empty_string():
    result = _guard().validate({"nick": {"minLength": 5}}, {"nick": ""})
    assert result.valid is True


def test_required_semantics():
    guard = _guard()
    schema = {"f": {"required": True}}
    for empty in ("", None, [], FileList()):
        assert guard.validate(schema, {"f": empty}).valid is False
    assert guard.validate(schema, {}).valid is False
    for value in (0, False, "0"):
        assert guard.validate(schema, {"f": value}).valid is True


def test_equal_to_reads_other_field_value():
    guard = _guard()
    schema = {"password": {"required": True}, "confirm": {"equalTo": "password"}}
    assert guard.validate(schema, {"password": "x", "confirm": "x"}).valid is True

    result = guard.validate(schema, {"password": "x", "confirm": "y"})
    assert result.valid is False
    assert [e.rule for e in result.errors["confirm"]] == ["equalTo"]
    assert result.errors["confirm"][0].message == 'Must match the "password" field.'


def test_message_precedence_inline_over_override_over_locale():
    registry = InMemoryLocaleRegistry()
    registry.register_locale("xx", {"required": "Locale text."})
    guard = FormGuard(locale="xx", messages={"required": "Override text."}, registry=registry)

    schema = {"f": {"required": True, "requiredMessage": "Inline text."}}
    assert guard.validate(schema, {"f": ""}).errors["f"][0].message == "Inline text."

    schema = {"f": {"required": True}}
    assert guard.validate(schema, {"f": ""}).errors["f"][0].message == "Override text."

    plain = FormGuard(locale="xx", registry=registry)
    assert plain.validate(schema, {"f": ""}).errors["f"][0].message == "Locale text."


def test_extended_locale_falls_back_to_default_text():
    registry = InMemoryLocaleRegistry()
    registry.register_locale("fr", {"required": "Obligatoire."})
    guard = FormGuard(locale="fr", registry=registry)

    result = guard.validate(
        {"a": {"required": True}, "b": {"email": True}}, {"a": "", "b": "nope"}
    )
    assert result.errors["a"][0].message == "Obligatoire."
    assert result.errors["b"][0].message == "Please enter a valid email address."


def test_unknown_locale_at_construction_falls_back(caplog):
    guard = _guard(locale="zz")
    assert guard.locale == "en"
    assert "zz" in caplog.text


def test_set_locale_rejects_unregistered_locale():
    guard = _guard()
    with pytest.raises(LocaleNotRegisteredError):
        guard.set_locale("zz")
    assert guard.locale == "en"


def test_set_locale_switches_messages():
    registry = InMemoryLocaleRegistry()
    registry.register_locale("pl", {"required": "To pole jest wymagane."})
    guard = FormGuard(registry=registry)
    assert guard.set_locale("pl") is guard
    assert guard.has_locale("pl")
    assert guard.get_locales() == ["en", "pl"]
    assert guard.validate({"f": {"required": True}}, {}).errors["f"][0].message == (
        "To pole jest wymagane."
    )


def test_add_rule_rejects_non_callable():
    with pytest.raises(InvalidPredicateError):
        _guard().add_rule("broken", "not a function")


def test_add_rule_with_string_message_is_instance_local():
    registry = InMemoryLocaleRegistry()
    first = FormGuard(registry=registry)
    second = FormGuard(registry=registry)
    first.add_rule("even", lambda v, p, a: int(v) % 2 == 0, "Must be even.")
    second.add_rule("even", lambda v, p, a: int(v) % 2 == 0)

    schema = {"n": {"even": True}}
    assert first.validate(schema, {"n": "3"}).errors["n"][0].message == "Must be even."
    assert second.validate(schema, {"n": "3"}).errors["n"][0].message == "Invalid value."
    assert "even" not in registry.get_messages("en")


def test_add_rule_with_locale_map_merges_into_registry():
    registry = InMemoryLocaleRegistry()
    registry.register_locale("pl", {})
    guard = FormGuard(locale="pl", registry=registry)
    guard.add_rule(
        "even",
        lambda v, p, a: int(v) % 2 == 0,
        {"en": "Must be even.", "pl": "Liczba musi być parzysta.", "de": "Muss gerade sein."},
    )

    assert registry.get_messages("en")["even"] == "Must be even."
    assert registry.get_messages("de")["even"] == "Muss gerade sein."
    assert guard.overrides["even"] == "Liczba musi być parzysta."

    other = FormGuard(locale="de", registry=registry)
    other.add_rule("even", lambda v, p, a: int(v) % 2 == 0)
    assert other.validate({"n": {"even": True}}, {"n": "1"}).errors["n"][0].message == (
        "Muss gerade sein."
    )


def test_add_rule_locale_map_falls_back_to_default_language():
    registry = InMemoryLocaleRegistry()
    registry.register_locale("pl", {})
    guard = FormGuard(locale="pl", registry=registry)
    guard.add_rule("odd", lambda v, p, a: int(v) % 2 == 1, {"en": "Must be odd."})
    assert guard.overrides["odd"] == "Must be odd."

    guard.add_rule("tiny", lambda v, p, a: len(v) < 2, {"fr": "Trop long."})
    assert guard.overrides["tiny"] == "Invalid value."


def test_custom_rule_wins_over_builtin():
    guard = _guard()
    guard.add_rule("email", lambda v, p, a: v.endswith("@corp.example"), "Corporate address only.")
    result = guard.validate({"mail": {"email": True}}, {"mail": "ala@gmail.com"})
    assert result.errors["mail"][0].message == "Corporate address only."
    assert "email" in guard.rule_names()


def test_sync_validate_ignores_async_rule():
    guard = _guard()
    guard.add_rule("taken", lambda v, p, a: _later(False), "Already taken.")
    schema = {"login": {"required": True, "taken": True}}
    assert guard.validate(schema, {"login": "ala"}).valid is True


def test_validate_async_orders_sync_errors_before_async():
    guard = _guard()
    guard.add_rule("taken", lambda v, p, a: _later(False), "Already taken.")
    schema = {"login": {"taken": True, "minLength": 5}}

    result = asyncio.run(guard.validate_async(schema, {"login": "ala"}))
    assert result.valid is False
    assert [e.rule for e in result.errors["login"]] == ["minLength", "taken"]
    assert result.errors["login"][1].message == "Already taken."


def test_async_rule_short_circuited_on_empty_value():
    guard = _guard()
    guard.add_rule("customAsync", lambda v, p, a: _later(False))
    result = asyncio.run(
        guard.validate_async({"f": {"required": True, "customAsync": True}}, {"f": ""})
    )
    assert [e.rule for e in result.errors["f"]] == ["required"]


def test_async_rule_receives_all_values():
    seen = {}

    async def unique(value, param, all_values):
        seen.update(all_values)
        return value != all_values[param]

    guard = _guard()
    guard.add_rule("differsFrom", unique)
    values = {"old": "secret", "new": "secret"}
    result = asyncio.run(guard.validate_async({"new": {"differsFrom": "old"}}, values))

    assert seen == values
    assert [e.rule for e in result.errors["new"]] == ["differsFrom"]


def test_schema_valid_is_and_of_fields():
    guard = _guard()
    schema = {
        "name": {"required": True, "alpha": True},
        "email": {"required": True, "email": True},
        "card": {"creditCard": True},
    }
    ok = {"name": "Ala", "email": "ala@example.com", "card": "4532015112830366"}
    assert guard.validate(schema, ok).model_dump() == {"valid": True, "errors": {}}

    bad = dict(ok, card="4532015112830367")
    result = guard.validate(schema, bad)
    assert result.valid is False
    assert list(result.errors) == ["card"]


def test_file_rules_through_engine():
    guard = _guard()
    schema = {"avatar": {"required": True, "fileSize": 1024, "fileType": "png,jpg"}}
    files = FileList([FileRef(name="me.gif", size=4096, content_type="image/gif")])
    result = guard.validate(schema, {"avatar": files})
    assert [e.rule for e in result.errors["avatar"]] == ["fileSize", "fileType"]
    assert result.errors["avatar"][0].message == "File size must not exceed 1.0 KB."
    assert result.errors["avatar"][1].message == "Allowed file types: png,jpg."


def test_validate_is_idempotent():
    guard = _guard()
    schema = {"a": {"required": True, "minLength": 3}, "b": {"in": ["x", "y"]}}
    values = {"a": "ab", "b": "z"}
    first = guard.validate(schema, values)
    second = guard.validate(schema, values)
    assert first == second
    assert values == {"a": "ab", "b": "z"}


def test_create_factory():
    registry = InMemoryLocaleRegistry()
    guard = FormGuard.create(registry=registry, messages={"required": "!"})
    assert isinstance(guard, FormGuard)
    assert guard.overrides == {"required": "!"}


def test_re_adding_custom_rule_replaces_it(caplog):
    guard = _guard()
    guard.add_rule("short", lambda v, p, a: len(v) < 3, "Too long.")
    with caplog.at_level(logging.INFO, logger="form_guard.engine"):
        guard.add_rule("short", lambda v, p, a: len(v) < 5, "Way too long.")

    assert 'Custom rule "short" replaced.' in caplog.text
    result = guard.validate({"code": {"short": True}}, {"code": "abcdef"})
    assert result.errors["code"][0].message == "Way too long."
    assert guard.validate({"code": {"short": True}}, {"code": "abcd"}).valid


def test_module_level_register_locale_reaches_default_engines():
    register_locale("x-shared", {"required": "Shared required."})

    first = FormGuard(locale="x-shared")
    second = FormGuard()
    assert first.registry is get_locale_registry()
    assert second.registry is first.registry
    assert second.has_locale("x-shared")

    result = first.validate({"a": {"required": True, "email": True}}, {"a": ""})
    assert result.errors["a"][0].message == "Shared required."
    assert first.validate({"a": {"email": True}}, {"a": "nope"}).errors["a"][0].message == (
        get_locale_registry().get_messages("en")["email"]
    )

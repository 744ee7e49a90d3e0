"""Тесты правил строкового представления значений контекста и селекторов."""

import math

import pytest

from simple_templates import compile
from simple_templates.context import lookup, stringify, validate_context
from simple_templates.errors import ContextValueError, TemplateUserError
from simple_templates.selectors import Selector, normalize, to_selector


class TestStringify:

    @pytest.mark.parametrize("value, expected", [
        (None, ""),
        ("", ""),
        ("text", "text"),
        (0, "0"),
        (-17, "-17"),
        (True, "true"),
        (False, "false"),
        (3.0, "3"),
        (-0.25, "-0.25"),
        (1e-7, "1e-07"),
        (math.inf, "inf"),
    ])
    def test_supported_values(self, value, expected):
        assert stringify("key", value) == expected

    def test_nan(self):
        assert stringify("key", math.nan) == "nan"

    @pytest.mark.parametrize("value", [[1, 2], {"a": 1}, object(), b"bytes"])
    def test_unsupported_values(self, value):
        with pytest.raises(ContextValueError) as exc_info:
            stringify("key", value)

        assert exc_info.value.key == "key"
        assert isinstance(exc_info.value, TypeError)
        assert isinstance(exc_info.value, TemplateUserError)

    def test_unsupported_value_raises_only_when_rendered(self):
        template = compile("{{used}}")

        assert template.render({"used": "ok", "unused": [1]}) == "ok"
        with pytest.raises(ContextValueError):
            template.render({"used": [1]})


class TestLookup:

    def test_missing_key(self):
        assert lookup({"a": "x"}, "b") == ""

    def test_no_context(self):
        assert lookup(None, "a") == ""

    def test_present_key(self):
        assert lookup({"a": 5}, "a") == "5"


class TestValidateContext:

    def test_copies_and_stringifies_keys(self):
        data = {"a": 1, 2: "two", "n": None}

        result = validate_context(data)

        assert result == {"a": 1, "2": "two", "n": None}
        assert result is not data

    def test_rejects_nested_values(self):
        with pytest.raises(ContextValueError):
            validate_context({"a": {"nested": 1}})


class TestSelectors:

    def test_to_selector_forms(self):
        assert to_selector("A") == Selector("A")
        assert to_selector(("A", {"x": 1})) == Selector("A", {"x": 1})
        assert to_selector({"name": "A"}) == Selector("A")
        assert to_selector({"name": "A", "context": {"x": 1}}) == Selector("A", {"x": 1})

    def test_normalize_single(self):
        assert normalize("A") == (False, (Selector("A"),))
        assert normalize(("A", {"x": 1})) == (False, (Selector("A", {"x": 1}),))

    def test_normalize_list(self):
        is_list, selectors = normalize(["A", ("B", None)])

        assert is_list
        assert selectors == (Selector("A"), Selector("B"))

    def test_context_or(self):
        assert Selector("A").context_or({"s": 1}) == {"s": 1}
        assert Selector("A", {}).context_or({"s": 1}) == {}

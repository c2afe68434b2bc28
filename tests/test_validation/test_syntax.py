"""Tests for property classifiers and vendor-prefix helpers."""

import pytest

from declint.validation.syntax import (
    has_interpolation,
    is_custom_property,
    is_standard_syntax_property,
    unprefixed,
    vendor_prefix,
)


class TestStandardSyntaxProperty:
    @pytest.mark.parametrize("prop", ["color", "Color", "-webkit-transition", "*zoom", "--x"])
    def test_standard(self, prop: str) -> None:
        assert is_standard_syntax_property(prop)

    @pytest.mark.parametrize(
        "prop",
        ["$var", "@var", "transform+", "transform+_", "#{$prop}-top", "@{prop}-top", "$(prop)", "{{ prop }}"],
    )
    def test_non_standard(self, prop: str) -> None:
        assert not is_standard_syntax_property(prop)

    def test_has_interpolation(self) -> None:
        assert has_interpolation("margin-#{$side}")
        assert not has_interpolation("margin-top")


class TestCustomProperty:
    def test_custom(self) -> None:
        assert is_custom_property("--main-color")

    @pytest.mark.parametrize("prop", ["color", "-webkit-box", "-x"])
    def test_not_custom(self, prop: str) -> None:
        assert not is_custom_property(prop)


class TestVendorPrefix:
    @pytest.mark.parametrize(
        "value, prefix, rest",
        [
            ("-webkit-flex", "-webkit-", "flex"),
            ("-moz-box", "-moz-", "box"),
            ("-ms-grid", "-ms-", "grid"),
            ("flex", "", "flex"),
            ("-1px", "", "-1px"),
            ("-webkit-linear-gradient(red, blue)", "-webkit-", "linear-gradient(red, blue)"),
        ],
    )
    def test_prefix_and_unprefixed(self, value: str, prefix: str, rest: str) -> None:
        assert vendor_prefix(value) == prefix
        assert unprefixed(value) == rest

    def test_only_leading_prefix_removed(self) -> None:
        assert unprefixed("-webkit-calc(-moz-x)") == "calc(-moz-x)"

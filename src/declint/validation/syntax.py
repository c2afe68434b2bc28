"""Property-name classifiers and vendor-prefix helpers."""

from __future__ import annotations

import re

_VENDOR_PREFIX_RE = re.compile(r"^-\w+-")

# Template interpolation from preprocessors: Less @{x}, PostCSS simple vars
# $(x), SCSS #{x} and generic {x} templates.
_INTERPOLATION_RES = (
    re.compile(r"@\{.+?\}"),
    re.compile(r"\$\(.+?\)"),
    re.compile(r"#\{.+?\}"),
    re.compile(r"\{.+?\}"),
)


def has_interpolation(text: str) -> bool:
    return any(pattern.search(text) for pattern in _INTERPOLATION_RES)


def is_standard_syntax_property(prop: str) -> bool:
    """Return False for property names that only make sense to a preprocessor."""
    # SCSS variable, list or map: $var: x
    if prop.startswith("$"):
        return False
    # Less variable: @var: x
    if prop.startswith("@"):
        return False
    # Less merge: transform+: x / transform+_: x
    if prop.endswith("+") or prop.endswith("+_"):
        return False
    if has_interpolation(prop):
        return False
    return True


def is_custom_property(prop: str) -> bool:
    """Custom properties (``--name``) are user-defined variables."""
    return prop.startswith("--")


def vendor_prefix(value: str) -> str:
    """Return the leading vendor prefix of *value* (``-webkit-``), or ``""``."""
    match = _VENDOR_PREFIX_RE.match(value)
    return match.group(0) if match else ""


def unprefixed(value: str) -> str:
    """Return *value* without its leading vendor prefix."""
    return _VENDOR_PREFIX_RE.sub("", value, count=1)

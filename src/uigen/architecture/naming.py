"""Name transforms shared by route, action and file derivation.

Paths built from these are used as map keys downstream, so every function
here must return the same output for the same input.
"""

from __future__ import annotations

import re

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_WHITESPACE = re.compile(r"\s+")

# Stripped one at a time, in this order: "ProductListView" -> "ProductList"
_BASE_NAME_SUFFIXES = ("Form", "List", "Grid", "Detail", "View", "Card")


def kebab_case(name: str) -> str:
    """``ProductForm`` -> ``product-form``, ``User Profile`` -> ``user-profile``."""
    return _WHITESPACE.sub("-", _CAMEL_BOUNDARY.sub(r"\1-\2", name)).lower()


def snake_case(name: str) -> str:
    return _WHITESPACE.sub("_", _CAMEL_BOUNDARY.sub(r"\1_\2", name)).lower()


def pluralize(word: str) -> str:
    if word.endswith("y"):
        return word[:-1] + "ies"
    if word.endswith("s"):
        return word + "es"
    return word + "s"


def capitalize(word: str) -> str:
    """Upper-case the first character only (``str.capitalize`` lowers the rest)."""
    return word[:1].upper() + word[1:]


def base_name(component_name: str) -> str:
    """Strip structural suffixes: ``ProductForm`` -> ``Product``.

    A name that is nothing but suffixes (``Form``) is returned unchanged so
    derived paths never contain an empty segment.
    """
    result = component_name
    for suffix in _BASE_NAME_SUFFIXES:
        if result.endswith(suffix):
            result = result[: -len(suffix)]
    return result or component_name

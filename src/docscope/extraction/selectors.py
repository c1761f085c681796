"""
Declarative node selectors.

Selectors are plain data. One function, ``matches``, decides whether a
node satisfies a selector, so the order in which selectors are tried is
just the order of a list.

Supported syntax for ``parse_selector``:
    *                   any element
    main                tag name
    .docs               class
    #documentation      id
    [role='main']       attribute equality
    [id='{symbol}']     attribute equality, filled in per call with ``bind``
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

from bs4 import Tag

SYMBOL_PLACEHOLDER = "{symbol}"

# Symbol-specific selectors, tried before any generic container
SYMBOL_SELECTOR_PATTERNS = [
    "[id='{symbol}']",
    "[id='{symbol}-method']",
    "[id='{symbol}-function']",
    "[id='method-{symbol}']",
    "[id='function-{symbol}']",
    "[name='{symbol}']",
    "[data-function='{symbol}']",
    "[data-method='{symbol}']",
]

_TAG_NAME = re.compile(r"^[a-zA-Z][a-zA-Z0-9-]*$")
_IDENTIFIER = re.compile(r"^[^\s.#\[\]]+$")
_ATTRIBUTE = re.compile(r"""^\[\s*([a-zA-Z_:][-a-zA-Z0-9_:.]*)\s*=\s*(?:'([^']*)'|"([^"]*)"|([^\s'"\]]+))\s*\]$""")


@dataclass(frozen=True)
class TagSelector:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ClassSelector:
    name: str

    def __str__(self) -> str:
        return f".{self.name}"


@dataclass(frozen=True)
class AttributeEquals:
    attr: str
    value: str

    def __str__(self) -> str:
        return f"[{self.attr}='{self.value}']"


@dataclass(frozen=True)
class AttributePattern:
    """Attribute equality whose value still contains ``{symbol}``."""

    attr: str
    pattern: str

    def __str__(self) -> str:
        return f"[{self.attr}='{self.pattern}']"


@dataclass(frozen=True)
class Wildcard:
    def __str__(self) -> str:
        return "*"


Selector = Union[TagSelector, ClassSelector, AttributeEquals, AttributePattern, Wildcard]


def parse_selector(text: str) -> Selector:
    """
    Parse a single simple selector.

    Args:
        text: Selector string, e.g. ``main``, ``.docs`` or ``[role='main']``

    Returns:
        The matching selector variant

    Raises:
        ValueError: If the string is not one of the supported forms
    """
    text = text.strip()
    if text == "*":
        return Wildcard()

    if text.startswith("."):
        name = text[1:]
        if _IDENTIFIER.match(name):
            return ClassSelector(name)

    elif text.startswith("#"):
        value = text[1:]
        if _IDENTIFIER.match(value):
            return AttributeEquals("id", value)

    elif text.startswith("["):
        match = _ATTRIBUTE.match(text)
        if match:
            attr = match.group(1).lower()
            value = next(g for g in match.groups()[1:] if g is not None)
            if SYMBOL_PLACEHOLDER in value:
                return AttributePattern(attr, value)
            return AttributeEquals(attr, value)

    elif _TAG_NAME.match(text):
        return TagSelector(text.lower())

    raise ValueError(f"Unsupported selector: {text!r}")


def bind(selector: Selector, symbol: str) -> Selector:
    """Substitute ``symbol`` into an AttributePattern; other selectors pass through."""
    if isinstance(selector, AttributePattern):
        return AttributeEquals(selector.attr, selector.pattern.replace(SYMBOL_PLACEHOLDER, symbol))
    return selector


def attribute_value(tag: Tag, attr: str) -> str | None:
    """Attribute value as a string; multi-valued attributes are space-joined."""
    value = tag.get(attr)
    if value is None:
        return None
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def matches(selector: Selector, tag: Tag, symbol: str = "") -> bool:
    """
    Test one node against one selector.

    Args:
        selector: Any selector variant
        tag: Element to test
        symbol: Used to fill in an unbound AttributePattern

    Returns:
        True if the node matches
    """
    if isinstance(selector, Wildcard):
        return True
    if isinstance(selector, TagSelector):
        return tag.name == selector.name
    if isinstance(selector, ClassSelector):
        classes = tag.get("class") or []
        if isinstance(classes, str):
            classes = classes.split()
        return selector.name in classes
    if isinstance(selector, AttributePattern):
        return matches(bind(selector, symbol), tag)
    if isinstance(selector, AttributeEquals):
        return attribute_value(tag, selector.attr) == selector.value
    raise TypeError(f"Unknown selector type: {type(selector).__name__}")


def first_match(selectors: Sequence[Selector], tag: Tag) -> Selector | None:
    """Return the highest-priority selector matching the node."""
    for selector in selectors:
        if matches(selector, tag):
            return selector
    return None


def build_selectors(symbol: str, container_selectors: Sequence[str]) -> list[Selector]:
    """
    Ordered selector list for the targeted pass.

    Symbol-specific selectors come first, then generic containers.

    Args:
        symbol: Function/method name, or "" for broad extraction
        container_selectors: Generic container selector strings

    Returns:
        Bound selectors in priority order
    """
    generic = [parse_selector(text) for text in container_selectors]
    if not symbol:
        return generic
    specific = [bind(parse_selector(text), symbol) for text in SYMBOL_SELECTOR_PATTERNS]
    return specific + generic

"""Decide whether an element is the documentation container for a symbol."""

from bs4 import Tag

from .document import HEADING_TAGS, is_heading, node_text
from .selectors import attribute_value

# Attributes documentation generators use to anchor a function's section
IDENTITY_ATTRIBUTES = ("id", "name", "data-function", "data-method")

DECORATED_FORMS = (
    "{symbol}",
    "{symbol}-method",
    "{symbol}-function",
    "method-{symbol}",
    "function-{symbol}",
)

BLOCK_CONTAINER_TAGS = frozenset({"section", "div", "article"})


def symbol_forms(symbol: str) -> frozenset[str]:
    return frozenset(form.replace("{symbol}", symbol) for form in DECORATED_FORMS)


def has_symbol_attribute(tag: Tag, symbol: str) -> bool:
    """
    True if an identity attribute names the symbol.

    Each attribute value is compared as-is and lower-cased against the
    symbol and its decorated forms (``{symbol}-method``, ``method-{symbol}``...).
    """
    forms = symbol_forms(symbol)
    for attr in IDENTITY_ATTRIBUTES:
        value = attribute_value(tag, attr)
        if value is None:
            continue
        if value in forms or value.lower() in forms:
            return True
    return False


def has_exact_heading(tag: Tag, symbol: str) -> bool:
    """True if some descendant heading's trimmed text is exactly the symbol."""
    for heading in tag.find_all(HEADING_TAGS):
        if heading.get_text().strip() == symbol:
            return True
    return False


def is_function_container(tag: Tag, symbol: str) -> bool:
    """
    Heuristic test for "this element documents ``symbol``".

    A node qualifies if any of:
    - it is a heading whose text contains the symbol (substring);
    - its id/name/data-function/data-method names the symbol;
    - it is a section/div/article holding a heading whose trimmed text
      equals the symbol exactly.

    The block rule uses exact equality: the symbol appearing as a
    substring in the block's prose or headings does not qualify it.

    Args:
        tag: Element to test
        symbol: Function/method name (case-sensitive)

    Returns:
        True if the element is a container for the symbol
    """
    if not symbol:
        return False

    if is_heading(tag) and symbol in node_text(tag):
        return True

    if has_symbol_attribute(tag, symbol):
        return True

    if tag.name in BLOCK_CONTAINER_TAGS:
        return has_exact_heading(tag, symbol)

    return False

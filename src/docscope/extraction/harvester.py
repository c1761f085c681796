"""Collect code samples and tables."""

from bs4 import Tag

from .document import inner_html, node_text

CODE_TAGS = ("pre", "code")
BROAD_HARVEST_TAGS = ("pre", "code", "table")


def is_nested_code(tag: Tag) -> bool:
    """A ``code`` inside a ``pre`` is covered by the ``pre``."""
    return tag.name == "code" and tag.find_parent("pre") is not None


def harvest_blocks(container: Tag) -> list[str]:
    """
    Inner HTML of every pre/code/table under a container, in document order.

    Args:
        container: Element whose descendants are scanned

    Returns:
        List of HTML fragments
    """
    fragments: list[str] = []
    for element in container.find_all(BROAD_HARVEST_TAGS):
        if is_nested_code(element):
            continue
        html = inner_html(element)
        if html.strip():
            fragments.append(html)
    return fragments


def fenced_code(tag: Tag, symbol: str = "") -> str:
    """
    Render a pre/code element as a fenced block.

    Args:
        tag: A pre or code element
        symbol: If given, elements whose text does not mention it are skipped

    Returns:
        The fenced block, or "" when the element is skipped or empty
    """
    if is_nested_code(tag):
        return ""
    text = node_text(tag)
    if symbol and symbol not in text:
        return ""
    if not text.strip():
        return ""
    body = text.strip("\n")
    return f"```\n{body}\n```"

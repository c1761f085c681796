"""Heading-bounded section extraction for a single symbol."""

from __future__ import annotations

import logging

from bs4 import Tag

from ..models.config import MAX_SEARCH_DEPTH
from .document import (
    HEADING_TAGS,
    heading_level,
    inner_html,
    is_heading,
    is_within,
    next_element_sibling,
    node_text,
    outer_html,
)
from .heuristics import has_symbol_attribute, is_function_container

logger = logging.getLogger(__name__)

# Parameter tables, examples and lists picked up outside the main section
HARVEST_TAGS = ("pre", "code", "table", "ul", "ol", "dl")


class SectionExtractor:
    """
    Extracts the part of a subtree that documents one symbol.

    Given an entry node:
    1. If the node is a function container it is extracted directly: a
       heading yields its outline section (the heading plus following
       siblings up to the next heading of the same or a higher level), any
       other container yields its full inner HTML. A block that only
       qualifies through an exact heading yields that heading's section
       when a later peer heading inside the block would end it.
    2. Otherwise children are searched for containers, at most
       ``max_search_depth`` levels below the entry node. The search does
       not descend into a container it has already extracted.
    3. Finally ``pre``/``code``/``table``/list elements under the entry
       node that mention the symbol and were not already emitted are
       appended.

    The DOM is only read. Bookkeeping about emitted nodes is local to one
    ``extract`` call.

    Example:
        extractor = SectionExtractor("createUser")
        html = extractor.extract(main_tag)
    """

    def __init__(self, symbol: str, max_search_depth: int = MAX_SEARCH_DEPTH):
        if not symbol:
            raise ValueError("SectionExtractor requires a non-empty symbol")
        self.symbol = symbol
        self.max_search_depth = max_search_depth

    def extract(self, node: Tag) -> str:
        """
        Extract everything under ``node`` that documents the symbol.

        Args:
            node: Entry element, usually a selector match

        Returns:
            Joined HTML fragments, or "" if nothing relevant was found
        """
        fragments: list[str] = []
        emitted: set[int] = set()

        if is_function_container(node, self.symbol):
            fragments.append(self._extract_container(node, emitted))
        else:
            self._search_children(node, 1, fragments, emitted)

        fragments.extend(self._harvest(node, emitted))

        if fragments:
            logger.debug(f"Extracted {len(fragments)} fragment(s) for {self.symbol!r} from <{node.name}>")
        return "\n\n".join(fragment for fragment in fragments if fragment.strip())

    def extract_section(self, heading: Tag) -> str:
        """
        Outline section starting at ``heading``.

        Args:
            heading: An h1-h6 element

        Returns:
            The heading followed by every following sibling until the next
            heading whose level is the same or more significant
        """
        return self._heading_section(heading, set())

    def _extract_container(self, node: Tag, emitted: set[int]) -> str:
        if is_heading(node):
            return self._heading_section(node, emitted)
        if not has_symbol_attribute(node, self.symbol):
            # Block matched through its heading only: stay inside that heading's section
            heading = self._exact_heading(node)
            if heading is not None and self._has_following_peer(heading):
                return self._heading_section(heading, emitted)
        emitted.add(id(node))
        return inner_html(node)

    def _heading_section(self, heading: Tag, emitted: set[int]) -> str:
        level = heading_level(heading)
        parts = [outer_html(heading)]
        emitted.add(id(heading))

        sibling = next_element_sibling(heading)
        while sibling is not None:
            if is_heading(sibling) and heading_level(sibling) <= level:
                break
            parts.append(outer_html(sibling))
            emitted.add(id(sibling))
            sibling = next_element_sibling(sibling)

        return "\n".join(parts)

    def _exact_heading(self, node: Tag) -> Tag | None:
        for heading in node.find_all(HEADING_TAGS):
            if heading.get_text().strip() == self.symbol:
                return heading
        return None

    def _has_following_peer(self, heading: Tag) -> bool:
        """True if a later sibling heading of the same or a higher level ends the section early."""
        level = heading_level(heading)
        sibling = next_element_sibling(heading)
        while sibling is not None:
            if is_heading(sibling) and heading_level(sibling) <= level:
                return True
            sibling = next_element_sibling(sibling)
        return False

    def _search_children(self, node: Tag, depth: int, fragments: list[str], emitted: set[int]) -> None:
        if depth > self.max_search_depth:
            return

        for child in node.find_all(True, recursive=False):
            # Already pulled in by a sibling heading's section
            if id(child) in emitted:
                continue
            if is_function_container(child, self.symbol):
                fragments.append(self._extract_container(child, emitted))
            else:
                self._search_children(child, depth + 1, fragments, emitted)

    def _harvest(self, node: Tag, emitted: set[int]) -> list[str]:
        harvested: list[str] = []
        for element in node.find_all(HARVEST_TAGS):
            if is_within(element, emitted):
                continue
            if element.name == "code" and element.find_parent("pre") is not None:
                continue
            if self.symbol not in node_text(element):
                continue
            harvested.append(outer_html(element))
            emitted.add(id(element))
        return harvested

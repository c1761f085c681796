"""HTML heuristics for locating documentation about a symbol."""

from .buffer import ContentBuffer
from .document import Document, clean_text, heading_level, is_heading
from .harvester import fenced_code, harvest_blocks
from .heuristics import has_exact_heading, has_symbol_attribute, is_function_container
from .sections import SectionExtractor
from .selectors import (
    AttributeEquals,
    AttributePattern,
    ClassSelector,
    Selector,
    TagSelector,
    Wildcard,
    bind,
    build_selectors,
    first_match,
    matches,
    parse_selector,
)

__all__ = [
    # Document
    "Document",
    "clean_text",
    "heading_level",
    "is_heading",
    # Selectors
    "AttributeEquals",
    "AttributePattern",
    "ClassSelector",
    "Selector",
    "TagSelector",
    "Wildcard",
    "bind",
    "build_selectors",
    "first_match",
    "matches",
    "parse_selector",
    # Heuristics
    "has_exact_heading",
    "has_symbol_attribute",
    "is_function_container",
    # Extraction
    "ContentBuffer",
    "SectionExtractor",
    "fenced_code",
    "harvest_blocks",
]

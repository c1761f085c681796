"""Append-only accumulator for extracted fragments."""

from __future__ import annotations


class ContentBuffer:
    """
    Ordered, append-only list of text/HTML fragments for one pass.

    Whitespace-only fragments are dropped. The joined text separates
    fragments with a blank line and is trimmed.

    Example:
        buffer = ContentBuffer()
        buffer.append("<h2>createUser</h2>")
        buffer.append("<p>Creates a user.</p>")
        print(buffer.text)
    """

    SEPARATOR = "\n\n"

    def __init__(self) -> None:
        self._fragments: list[str] = []

    def append(self, fragment: str) -> None:
        if fragment and fragment.strip():
            self._fragments.append(fragment.strip("\n"))

    def extend(self, fragments: list[str]) -> None:
        for fragment in fragments:
            self.append(fragment)

    @property
    def fragments(self) -> tuple[str, ...]:
        return tuple(self._fragments)

    @property
    def text(self) -> str:
        return self.SEPARATOR.join(self._fragments).strip()

    def __len__(self) -> int:
        return len(self._fragments)

    def __bool__(self) -> bool:
        return bool(self.text)

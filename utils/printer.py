from __future__ import annotations

from typing import List


class Printer:
    """Append-only text buffer with line primitives.

    No escaping is done; callers are responsible for producing valid output.
    """

    LINE_END = "\n"

    def __init__(self) -> None:
        self._parts: List[str] = []

    def print(self, text: str) -> None:
        self._parts.append(text)

    def println(self, text: str) -> None:
        self._parts.append(text)
        self._parts.append(self.LINE_END)

    def newline(self) -> None:
        self._parts.append(self.LINE_END)

    def getvalue(self) -> str:
        return "".join(self._parts)

    def reset(self) -> None:
        self._parts.clear()

    def __str__(self) -> str:
        return self.getvalue()


__all__ = ["Printer"]

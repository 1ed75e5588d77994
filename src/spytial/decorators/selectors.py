"""Selector expressions with an explicit reference to the annotated instance.

A selector such as ``self.children`` parses into literal text and ``SelfRef``
parts. Resolving a selector substitutes a placeholder identifier for every
``SelfRef`` so that selectors of different instances never collide.
"""

import re
from dataclasses import dataclass

DEFAULT_SELF_TOKEN = "self"


@dataclass(frozen=True)
class SelfRef:
    """Reference to the instance an annotation is attached to."""


SELF = SelfRef()


@dataclass(frozen=True)
class Selector:
    """Parsed selector: a sequence of literal text and instance references."""
    parts: tuple[str | SelfRef, ...]
    self_token: str = DEFAULT_SELF_TOKEN

    @classmethod
    def parse(cls, text: str, self_token: str = DEFAULT_SELF_TOKEN) -> "Selector":
        """Split selector text on whole-word occurrences of the self token."""
        parts: list[str | SelfRef] = []
        position = 0
        for match in re.finditer(rf"\b{re.escape(self_token)}\b", text):
            if match.start() > position:
                parts.append(text[position:match.start()])
            parts.append(SELF)
            position = match.end()
        if position < len(text):
            parts.append(text[position:])
        return cls(tuple(parts), self_token)

    @property
    def has_self_ref(self) -> bool:
        return any(isinstance(part, SelfRef) for part in self.parts)

    def resolve(self, placeholder: str) -> str:
        """Render the selector with every SelfRef replaced by ``placeholder``."""
        return "".join(placeholder if isinstance(part, SelfRef) else part for part in self.parts)

    def __str__(self) -> str:
        return self.resolve(self.self_token)

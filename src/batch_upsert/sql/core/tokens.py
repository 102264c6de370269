"""
Templated SQL fragments.

A fragment is a sequence of parts: plain SQL text, ``Identifier`` tokens,
``Param`` tokens, or nested fragments. Nothing is quoted or numbered here;
that happens once, over the fully composed statement, in
``batch_upsert.sql.core.parameters``.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Tuple, Union


@dataclass(frozen=True)
class Identifier:
    """An identifier (table, schema or column name) to be quoted."""

    name: str


@dataclass(frozen=True)
class Param:
    """A value to be bound through a positional parameter."""

    value: Any


Token = Union[str, Identifier, Param]


@dataclass(frozen=True)
class Fragment:
    """An immutable piece of templated SQL."""

    parts: Tuple[Union[Token, "Fragment"], ...] = ()

    @classmethod
    def of(cls, *parts: Union[Token, "Fragment"]) -> "Fragment":
        return cls(tuple(parts))

    @classmethod
    def join(
        cls, separator: str, items: Iterable[Union[Token, "Fragment"]]
    ) -> "Fragment":
        """Interleave ``separator`` text between ``items``."""
        parts = []
        for i, item in enumerate(items):
            if i:
                parts.append(separator)
            parts.append(item)
        return cls(tuple(parts))

    def tokens(self) -> Iterator[Token]:
        """Yield the flattened token stream, left to right."""
        for part in self.parts:
            if isinstance(part, Fragment):
                yield from part.tokens()
            else:
                yield part


def identifier_list(names: Iterable[str]) -> Fragment:
    """``("a","b",...)`` as identifier tokens."""
    return Fragment.of("(", Fragment.join(",", (Identifier(n) for n in names)), ")")

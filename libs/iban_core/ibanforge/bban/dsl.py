"""
Compact BBAN format strings, as published in the SWIFT IBAN registry.

A format is a run of tokens ``<length>[!]<class>`` with no separators, e.g.
``4!a6!n8!n``. ``!`` marks a fixed length (otherwise "up to"); the class is
``n`` digits, ``a`` upper case letters, ``c`` alphanumerics or ``e`` blanks.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Sequence, Union

from ..errors import FormatViolation, IbanFormatError
from .entry import CharacterClass, EntryType, FieldDescriptor
from .structure import BbanStructure

_TOKEN_RE = re.compile(r"(\d+)(!)?([nace])")


@dataclass(frozen=True)
class FormatToken:
    length: int
    fixed: bool
    character_class: str  # n, a, c or e

    def render(self) -> str:
        return f"{self.length}{'!' if self.fixed else ''}{self.character_class}"


def _error(text: str, detail: str) -> IbanFormatError:
    return IbanFormatError(
        FormatViolation.STRUCTURE_FORMAT,
        f"Invalid BBAN format [{text}]: {detail}",
        actual=text,
    )


def parse_format(text: str) -> List[FormatToken]:
    if not isinstance(text, str) or not text:
        raise _error(str(text), "empty format")
    tokens: List[FormatToken] = []
    pos = 0
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            raise _error(text, f"unexpected input at position {pos}")
        tokens.append(FormatToken(int(m.group(1)), m.group(2) is not None, m.group(3)))
        pos = m.end()
    return tokens


def format_of(structure: BbanStructure) -> str:
    return "".join(f"{e.length}!{e.character_class.value}" for e in structure.entries)


def structure_from_format(text: str, entry_types: Sequence[Union[EntryType, str]]) -> BbanStructure:
    """Pair each fixed-length token with an entry type, in order."""
    tokens = parse_format(text)
    if len(tokens) != len(entry_types):
        raise _error(text, f"{len(tokens)} tokens but {len(entry_types)} entry types")
    entries = []
    for token, entry_type in zip(tokens, entry_types):
        if not token.fixed:
            raise _error(text, f"token {token.render()} is not fixed length")
        if token.character_class == "e":
            raise _error(text, "blank fields are not allowed in a BBAN")
        entries.append(FieldDescriptor(EntryType(entry_type), CharacterClass(token.character_class), token.length))
    try:
        return BbanStructure(*entries)
    except ValueError as e:
        raise _error(text, str(e)) from e


__all__ = ["FormatToken", "parse_format", "format_of", "structure_from_format"]

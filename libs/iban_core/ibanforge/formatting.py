from __future__ import annotations

from enum import Enum

from .constants import GROUP_SEPARATOR, GROUP_SIZE


class IbanFormat(str, Enum):
    COMPACT = "compact"  # DE89370400440532013000
    SPACED = "spaced"    # DE89 3704 0044 0532 0130 00


def to_formatted_string(iban: str) -> str:
    """Print format: groups of four characters separated by one space."""
    return GROUP_SEPARATOR.join(iban[i:i + GROUP_SIZE] for i in range(0, len(iban), GROUP_SIZE))


def to_compact(text: str) -> str:
    return text.replace(GROUP_SEPARATOR, "")


__all__ = ["IbanFormat", "to_formatted_string", "to_compact"]

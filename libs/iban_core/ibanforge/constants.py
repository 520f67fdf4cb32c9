from __future__ import annotations

from typing import Final

# IBAN layout: country code, check digit, then the BBAN
COUNTRY_CODE_INDEX: Final[int] = 0
COUNTRY_CODE_LENGTH: Final[int] = 2
CHECK_DIGIT_INDEX: Final[int] = COUNTRY_CODE_LENGTH
CHECK_DIGIT_LENGTH: Final[int] = 2
BBAN_INDEX: Final[int] = CHECK_DIGIT_INDEX + CHECK_DIGIT_LENGTH
DEFAULT_CHECK_DIGIT: Final[str] = "00"

# SEPA creditor identifier: country, check digit, business code, national identifier
BUSINESS_CODE_INDEX: Final[int] = BBAN_INDEX
BUSINESS_CODE_LENGTH: Final[int] = 3
NATIONAL_IDENTIFIER_INDEX: Final[int] = BUSINESS_CODE_INDEX + BUSINESS_CODE_LENGTH
DEFAULT_BUSINESS_CODE: Final[str] = "ZZZ"
CREDITOR_ID_MAX_LENGTH: Final[int] = 35

# Printed (spaced) representation
GROUP_SIZE: Final[int] = 4
GROUP_SEPARATOR: Final[str] = " "

# MOD-97 streaming
MOD: Final[int] = 97
MAX_RUNNING_TOTAL: Final[int] = 999_999_999

# Environment variables controlling default behaviour
ENV_NATIONAL_CHECK_DIGITS: Final[str] = "IBANFORGE_NATIONAL_CHECK_DIGITS"  # "1"/"true" enables enhanced validation
ENV_STRUCTURES_FILE: Final[str] = "IBANFORGE_STRUCTURES_FILE"              # YAML file with extra BBAN structures
ENV_RANDOM_SEED: Final[str] = "IBANFORGE_RANDOM_SEED"                      # default seed for random generation

__all__ = [
    "COUNTRY_CODE_INDEX",
    "COUNTRY_CODE_LENGTH",
    "CHECK_DIGIT_INDEX",
    "CHECK_DIGIT_LENGTH",
    "BBAN_INDEX",
    "DEFAULT_CHECK_DIGIT",
    "BUSINESS_CODE_INDEX",
    "BUSINESS_CODE_LENGTH",
    "NATIONAL_IDENTIFIER_INDEX",
    "DEFAULT_BUSINESS_CODE",
    "CREDITOR_ID_MAX_LENGTH",
    "GROUP_SIZE",
    "GROUP_SEPARATOR",
    "MOD",
    "MAX_RUNNING_TOTAL",
    "ENV_NATIONAL_CHECK_DIGITS",
    "ENV_STRUCTURES_FILE",
    "ENV_RANDOM_SEED",
]

"""
IBAN validation pipeline and the string-level API.

Validation runs a fixed sequence of stages and stops at the first failure.
``validate`` returns a ``ValidationResult`` naming the failed stage and the
typed error; ``check`` raises that error; ``is_valid`` only answers yes/no.

The module owns the process-wide default registries. They are filled on first
use: built-in tables, then any providers registered through
``register_provider`` / ``register_algorithm`` (or the structures file named by
``IBANFORGE_STRUCTURES_FILE``), in registration order.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .bban.entry import EntryType
from .bban.structure import BbanStructure, StructureRegistry
from .bban.validator import extract_entry, validate_bban
from .bban.value import Bban
from .checkdigit.mod97 import calculate_check_digit as _calculate_check_digit
from .checkdigit.mod97 import validate_check_digit
from .config import ValidationConfig, load_config
from .constants import BBAN_INDEX, CHECK_DIGIT_INDEX, CHECK_DIGIT_LENGTH, COUNTRY_CODE_LENGTH
from .country import CountryCode
from .errors import FormatViolation, IbanError, IbanFormatError, UnsupportedCountryError
from .formatting import IbanFormat, to_compact
from .formatting import to_formatted_string as _to_formatted_string
from .national.base import NationalAlgorithm
from .national.registry import NationalAlgorithmRegistry
from .spi import BbanStructureProvider, ExtensionRegistry, YamlStructureProvider

log = logging.getLogger("ibanforge.validation")


class Stage(str, Enum):
    NULL_CHECK = "null_check"
    EMPTY_CHECK = "empty_check"
    COUNTRY_CODE_FORMAT = "country_code_format"
    COUNTRY_EXISTS = "country_exists"
    COUNTRY_SUPPORTED = "country_supported"
    CHECK_DIGIT_PRESENCE = "check_digit_presence"
    TOTAL_LENGTH = "total_length"
    STRUCTURAL_FIELDS = "structural_fields"
    MOD97_CHECK_DIGIT = "mod97_check_digit"
    NATIONAL_CHECK_DIGIT = "national_check_digit"
    FORMATTING = "formatting"


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    stage: Optional[Stage] = None  # failing stage, None when ok
    error: Optional[IbanError] = None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error

    def __bool__(self) -> bool:
        return self.ok


@dataclass
class _Candidate:
    text: Optional[str]
    country: Optional[CountryCode] = None
    structure: Optional[BbanStructure] = None


class ValidationPipeline:
    """Ordered, short-circuiting validation stages over explicit registries."""

    def __init__(
        self,
        config: Optional[ValidationConfig] = None,
        structures: Optional[StructureRegistry] = None,
        algorithms: Optional[NationalAlgorithmRegistry] = None,
    ):
        self.config = config or ValidationConfig()
        self.structures = structures or StructureRegistry()
        self.algorithms = algorithms or NationalAlgorithmRegistry()

    def stages(self, enhanced: bool) -> List[Tuple[Stage, Callable[[_Candidate], None]]]:
        out = [
            (Stage.NULL_CHECK, self._null_check),
            (Stage.EMPTY_CHECK, self._empty_check),
            (Stage.COUNTRY_CODE_FORMAT, self._country_code_format),
            (Stage.COUNTRY_EXISTS, self._country_exists),
            (Stage.COUNTRY_SUPPORTED, self._country_supported),
            (Stage.CHECK_DIGIT_PRESENCE, self._check_digit_presence),
            (Stage.TOTAL_LENGTH, self._total_length),
            (Stage.STRUCTURAL_FIELDS, self._structural_fields),
            (Stage.MOD97_CHECK_DIGIT, self._mod97_check_digit),
        ]
        if enhanced:
            out.append((Stage.NATIONAL_CHECK_DIGIT, self._national_check_digit))
        return out

    def run(
        self,
        iban: Optional[str],
        fmt: IbanFormat = IbanFormat.COMPACT,
        enhanced: Optional[bool] = None,
    ) -> ValidationResult:
        if enhanced is None:
            enhanced = self.config.national_check_digits
        spaced = IbanFormat(fmt) is IbanFormat.SPACED
        candidate = _Candidate(to_compact(iban) if spaced and isinstance(iban, str) else iban)
        stage = Stage.NULL_CHECK
        try:
            for stage, fn in self.stages(enhanced):
                fn(candidate)
            if spaced:
                stage = Stage.FORMATTING
                self._formatting(iban, candidate)
        except IbanError as e:
            log.debug("iban rejected at %s: %s", stage.value, e.message)
            return ValidationResult(False, stage, e)
        return ValidationResult(True)

    def check_national_check_digit(self, iban: str) -> None:
        """Structural checks, then the national rule; the MOD-97 digits are not looked at."""
        candidate = _Candidate(iban)
        for stage, fn in self.stages(enhanced=True):
            if stage is not Stage.MOD97_CHECK_DIGIT:
                fn(candidate)

    # ----- stages -----

    @staticmethod
    def _null_check(c: _Candidate) -> None:
        if c.text is None:
            raise IbanFormatError(FormatViolation.IBAN_NOT_NULL, "Null can't be a valid Iban.")
        if not isinstance(c.text, str):
            raise IbanFormatError(FormatViolation.IBAN_NOT_NULL, f"Iban must be a string, got {type(c.text).__name__}.")

    @staticmethod
    def _empty_check(c: _Candidate) -> None:
        if len(c.text) == 0:
            raise IbanFormatError(FormatViolation.IBAN_NOT_EMPTY, "Empty string can't be a valid Iban.")

    @staticmethod
    def _country_code_format(c: _Candidate) -> None:
        text = c.text
        if len(text) < COUNTRY_CODE_LENGTH:
            raise IbanFormatError(
                FormatViolation.COUNTRY_CODE_TWO_LETTERS,
                "Iban must contain 2 char country code.",
                actual=text,
            )
        code = text[:COUNTRY_CODE_LENGTH]
        if not all("A" <= ch <= "Z" for ch in code):
            raise IbanFormatError(
                FormatViolation.COUNTRY_CODE_UPPER_CASE_LETTERS,
                "Iban country code must contain upper case letters.",
                actual=code,
            )

    @staticmethod
    def _country_exists(c: _Candidate) -> None:
        code = c.text[:COUNTRY_CODE_LENGTH]
        country = CountryCode.get_by_code(code)
        if country is None:
            raise UnsupportedCountryError(code, "Iban contains non existing country code.")
        c.country = country

    def _country_supported(self, c: _Candidate) -> None:
        structure = self.structures.for_country(c.country)
        if structure is None:
            raise UnsupportedCountryError(c.country.value, "Country code is not supported.")
        c.structure = structure

    @staticmethod
    def _check_digit_presence(c: _Candidate) -> None:
        check_digit = c.text[CHECK_DIGIT_INDEX:BBAN_INDEX]
        if len(check_digit) < CHECK_DIGIT_LENGTH:
            raise IbanFormatError(
                FormatViolation.CHECK_DIGIT_TWO_DIGITS,
                "Iban must contain 2 digit check digit.",
                actual=check_digit,
            )
        if not check_digit.isdigit() or not check_digit.isascii():
            raise IbanFormatError(
                FormatViolation.CHECK_DIGIT_ONLY_DIGITS,
                "Iban's check digit should contain only digits.",
                actual=check_digit,
            )

    @staticmethod
    def _total_length(c: _Candidate) -> None:
        bban = c.text[BBAN_INDEX:]
        expected = c.structure.bban_length
        if len(bban) != expected:
            raise IbanFormatError(
                FormatViolation.BBAN_LENGTH,
                f"[{bban}] length is {len(bban)}, expected BBAN length is: {expected}",
                actual=len(bban),
                expected=expected,
            )

    @staticmethod
    def _structural_fields(c: _Candidate) -> None:
        validate_bban(c.country, c.text[BBAN_INDEX:], c.structure)

    @staticmethod
    def _mod97_check_digit(c: _Candidate) -> None:
        validate_check_digit(c.text)

    def _national_check_digit(self, c: _Candidate) -> None:
        self.algorithms.check(Bban(c.country, c.text[BBAN_INDEX:], c.structure))

    @staticmethod
    def _formatting(original: str, c: _Candidate) -> None:
        if _to_formatted_string(c.text) != original:
            raise IbanFormatError(
                FormatViolation.IBAN_FORMATTING,
                f"Iban must be formatted using 4 characters and space combination. Instead is {original}",
                actual=original,
                expected=_to_formatted_string(c.text),
            )


# ----- process-wide defaults -----

structures = StructureRegistry()
algorithms = NationalAlgorithmRegistry()
extensions = ExtensionRegistry(structures, algorithms)

_lock = threading.RLock()
_config: Optional[ValidationConfig] = None
_pipeline: Optional[ValidationPipeline] = None


def _register_structures_file(config: ValidationConfig) -> None:
    if config.structures_file:
        extensions.add_provider(YamlStructureProvider.from_file(config.structures_file))
        log.info("structures file registered: %s", config.structures_file)


def get_config() -> ValidationConfig:
    """Library settings; read from the environment on first call."""
    global _config
    if _config is not None:
        return _config
    with _lock:
        if _config is None:
            config = load_config()
            _register_structures_file(config)
            _config = config
    return _config


def configure(config: ValidationConfig) -> None:
    """Replace the settings used by the module-level functions, loading its structures file if any."""
    global _config, _pipeline
    with _lock:
        _register_structures_file(config)
        _config = config
        _pipeline = None


def default_pipeline() -> ValidationPipeline:
    global _pipeline
    pipeline = _pipeline
    if pipeline is not None:
        return pipeline
    with _lock:
        if _pipeline is None:
            config = get_config()
            extensions.apply()
            _pipeline = ValidationPipeline(config, structures, algorithms)
        return _pipeline


def reset_defaults() -> None:
    """Forget registrations and settings; the next call reloads everything."""
    global _config, _pipeline
    with _lock:
        extensions.reset()
        structures.reset()
        algorithms.reset()
        _config = None
        _pipeline = None


def register_provider(provider: BbanStructureProvider) -> None:
    extensions.add_provider(provider)


def register_algorithm(algorithm: NationalAlgorithm) -> None:
    extensions.add_algorithm(algorithm)


def structure_for(country: Optional[CountryCode]) -> Optional[BbanStructure]:
    default_pipeline()
    return structures.for_country(country)


def supported_countries() -> List[CountryCode]:
    default_pipeline()
    return structures.supported_countries()


def algorithm_for(country: Optional[CountryCode]) -> Optional[NationalAlgorithm]:
    default_pipeline()
    return algorithms.get(country)


# ----- module-level API -----

def validate(iban: Optional[str], fmt: IbanFormat = IbanFormat.COMPACT, enhanced: Optional[bool] = None) -> ValidationResult:
    return default_pipeline().run(iban, fmt, enhanced)


def check(iban: Optional[str], fmt: IbanFormat = IbanFormat.COMPACT, enhanced: Optional[bool] = None) -> None:
    """Raise the first failing stage's error; return None for a valid IBAN."""
    validate(iban, fmt, enhanced).raise_for_error()


def is_valid(iban: Optional[str], fmt: IbanFormat = IbanFormat.COMPACT, enhanced: Optional[bool] = None) -> bool:
    try:
        return validate(iban, fmt, enhanced).ok
    except IbanError:
        return False


def validate_with_national_check_digit(iban: Optional[str], fmt: IbanFormat = IbanFormat.COMPACT) -> ValidationResult:
    return validate(iban, fmt, enhanced=True)


def is_valid_with_national_check_digit(iban: Optional[str], fmt: IbanFormat = IbanFormat.COMPACT) -> bool:
    return is_valid(iban, fmt, enhanced=True)


def validate_national_check_digit(iban: str) -> None:
    default_pipeline().check_national_check_digit(iban)


def calculate_check_digit(country_code, bban: str) -> str:
    return _calculate_check_digit(country_code, bban)


def _country_of(code) -> Optional[CountryCode]:
    if isinstance(code, CountryCode):
        return code
    if not isinstance(code, str):
        return None
    return CountryCode.get_by_code(code)


def is_supported_country(code) -> bool:
    return structure_for(_country_of(code)) is not None


def get_iban_length(code) -> int:
    country = _country_of(code)
    structure = structure_for(country)
    if structure is None:
        raise UnsupportedCountryError(str(code), f"Country code [{code}] is not supported.")
    return structure.iban_length


# ----- field getters on IBAN strings (no validation) -----

def get_country_code(iban: str) -> str:
    return iban[:COUNTRY_CODE_LENGTH]


def get_check_digit(iban: str) -> str:
    return iban[CHECK_DIGIT_INDEX:BBAN_INDEX]


def get_bban(iban: str) -> str:
    return iban[BBAN_INDEX:]


def _entry(iban: str, entry_type: EntryType) -> Optional[str]:
    structure = structure_for(_country_of(get_country_code(iban)))
    return extract_entry(structure, get_bban(iban), entry_type)


def get_bank_code(iban: str) -> Optional[str]:
    return _entry(iban, EntryType.bank_code)


def get_branch_code(iban: str) -> Optional[str]:
    return _entry(iban, EntryType.branch_code)


def get_account_number(iban: str) -> Optional[str]:
    return _entry(iban, EntryType.account_number)


def get_national_check_digit(iban: str) -> Optional[str]:
    return _entry(iban, EntryType.national_check_digit)


def get_account_type(iban: str) -> Optional[str]:
    return _entry(iban, EntryType.account_type)


def get_owner_account_type(iban: str) -> Optional[str]:
    return _entry(iban, EntryType.owner_account_number)


def get_identification_number(iban: str) -> Optional[str]:
    return _entry(iban, EntryType.identification_number)


def to_formatted_string(iban: str) -> str:
    return _to_formatted_string(iban)


__all__ = [
    "Stage",
    "ValidationResult",
    "ValidationPipeline",
    "structures",
    "algorithms",
    "extensions",
    "get_config",
    "configure",
    "default_pipeline",
    "reset_defaults",
    "register_provider",
    "register_algorithm",
    "structure_for",
    "algorithm_for",
    "supported_countries",
    "validate",
    "check",
    "is_valid",
    "validate_with_national_check_digit",
    "is_valid_with_national_check_digit",
    "validate_national_check_digit",
    "calculate_check_digit",
    "is_supported_country",
    "get_iban_length",
    "get_country_code",
    "get_check_digit",
    "get_bban",
    "get_bank_code",
    "get_branch_code",
    "get_account_number",
    "get_national_check_digit",
    "get_account_type",
    "get_owner_account_type",
    "get_identification_number",
    "to_formatted_string",
]

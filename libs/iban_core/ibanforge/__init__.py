# path: libs/iban_core/ibanforge/__init__.py
"""
ibanforge: IBAN/BBAN validation and generation.

Exports the IBAN value and builder, the string-level validation API, country
codes, BBAN layouts, national check digit algorithms and the extension hooks.
"""
from .country import CountryCode
from .creditor_id import CreditorIdentifier, CreditorIdentifierBuilder
from .errors import (
    CreditorIdentifierFormatError,
    FormatViolation,
    IbanError,
    IbanFormatError,
    InvalidCheckDigitError,
    InvalidNationalCheckDigitError,
    UnsupportedCountryError,
)
from .formatting import IbanFormat
from .bban import BbanStructure, EntryType, CharacterClass, FieldDescriptor, StructureRegistry
from .bban.value import Bban
from .config import ValidationConfig, load_config
from .iban import Iban, IbanBuilder
from .national import NationalAlgorithm, FunctionAlgorithm, NationalAlgorithmRegistry
from .random_gen import RandomGenerator
from .spi import BbanStructureProvider, StaticStructureProvider, YamlStructureProvider, ExtensionRegistry
from .validation import (
    Stage,
    ValidationResult,
    ValidationPipeline,
    validate,
    check,
    is_valid,
    validate_with_national_check_digit,
    is_valid_with_national_check_digit,
    validate_national_check_digit,
    calculate_check_digit,
    is_supported_country,
    get_iban_length,
    supported_countries,
    register_provider,
    register_algorithm,
    configure,
    reset_defaults,
    get_country_code,
    get_check_digit,
    get_bban,
    get_bank_code,
    get_branch_code,
    get_account_number,
    get_national_check_digit,
    get_account_type,
    get_owner_account_type,
    get_identification_number,
    to_formatted_string,
)

__version__ = "0.1.0"

__all__ = [
    "CountryCode",
    "CreditorIdentifier",
    "CreditorIdentifierBuilder",
    "CreditorIdentifierFormatError",
    "FormatViolation",
    "IbanError",
    "IbanFormatError",
    "InvalidCheckDigitError",
    "InvalidNationalCheckDigitError",
    "UnsupportedCountryError",
    "IbanFormat",
    "BbanStructure",
    "EntryType",
    "CharacterClass",
    "FieldDescriptor",
    "StructureRegistry",
    "Bban",
    "ValidationConfig",
    "load_config",
    "Iban",
    "IbanBuilder",
    "NationalAlgorithm",
    "FunctionAlgorithm",
    "NationalAlgorithmRegistry",
    "RandomGenerator",
    "BbanStructureProvider",
    "StaticStructureProvider",
    "YamlStructureProvider",
    "ExtensionRegistry",
    "Stage",
    "ValidationResult",
    "ValidationPipeline",
    "validate",
    "check",
    "is_valid",
    "validate_with_national_check_digit",
    "is_valid_with_national_check_digit",
    "validate_national_check_digit",
    "calculate_check_digit",
    "is_supported_country",
    "get_iban_length",
    "supported_countries",
    "register_provider",
    "register_algorithm",
    "configure",
    "reset_defaults",
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

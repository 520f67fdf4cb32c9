from .mod97 import (
    calculate_mod,
    calculate_check_digit,
    calculate_check_digit_for_iban,
    validate_check_digit,
)
from .iso7064 import (
    mod97_10,
    mod97_10_check_digits,
    letters_to_digits,
    rib_check_digits,
    french_letter_value,
    french_rib_numeric,
)

__all__ = [
    "calculate_mod",
    "calculate_check_digit",
    "calculate_check_digit_for_iban",
    "validate_check_digit",
    "mod97_10",
    "mod97_10_check_digits",
    "letters_to_digits",
    "rib_check_digits",
    "french_letter_value",
    "french_rib_numeric",
]

from .base import NationalAlgorithm, FunctionAlgorithm
from .algorithms import (
    BUILT_IN_ALGORITHMS,
    BaNationalCheckDigit,
    BeNationalCheckDigit,
    EsNationalCheckDigit,
    FiNationalCheckDigit,
    FrNationalCheckDigit,
    ItNationalCheckDigit,
    MeNationalCheckDigit,
    MkNationalCheckDigit,
    Mod97NationalCheckDigit,
    NlNationalCheckDigit,
    NoNationalCheckDigit,
    PtNationalCheckDigit,
    RsNationalCheckDigit,
    SiNationalCheckDigit,
    SkNationalCheckDigit,
    TnNationalCheckDigit,
)
from .registry import NationalAlgorithmRegistry

__all__ = [
    "NationalAlgorithm",
    "FunctionAlgorithm",
    "NationalAlgorithmRegistry",
    "BUILT_IN_ALGORITHMS",
    "BaNationalCheckDigit",
    "BeNationalCheckDigit",
    "EsNationalCheckDigit",
    "FiNationalCheckDigit",
    "FrNationalCheckDigit",
    "ItNationalCheckDigit",
    "MeNationalCheckDigit",
    "MkNationalCheckDigit",
    "Mod97NationalCheckDigit",
    "NlNationalCheckDigit",
    "NoNationalCheckDigit",
    "PtNationalCheckDigit",
    "RsNationalCheckDigit",
    "SiNationalCheckDigit",
    "SkNationalCheckDigit",
    "TnNationalCheckDigit",
]

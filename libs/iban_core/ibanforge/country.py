"""
ISO 3166-1 country codes.

English names and alpha-3 codes are taken from the ``iso3166`` package.
Codes the package does not carry (user-assigned XK, and the withdrawn AN and
CS that banks still send during their transitional period) are described by
``_LOCAL_COUNTRIES``.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple

import iso3166


class CountryCode(str, Enum):
    """Closed enumeration of alpha-2 country codes."""

    AD = "AD"
    AE = "AE"
    AF = "AF"
    AG = "AG"
    AI = "AI"
    AL = "AL"
    AM = "AM"
    AN = "AN"
    AO = "AO"
    AQ = "AQ"
    AR = "AR"
    AS = "AS"
    AT = "AT"
    AU = "AU"
    AW = "AW"
    AX = "AX"
    AZ = "AZ"
    BA = "BA"
    BB = "BB"
    BD = "BD"
    BE = "BE"
    BF = "BF"
    BG = "BG"
    BH = "BH"
    BI = "BI"
    BJ = "BJ"
    BL = "BL"
    BM = "BM"
    BN = "BN"
    BO = "BO"
    BQ = "BQ"
    BR = "BR"
    BS = "BS"
    BT = "BT"
    BV = "BV"
    BW = "BW"
    BY = "BY"
    BZ = "BZ"
    CA = "CA"
    CC = "CC"
    CD = "CD"
    CF = "CF"
    CG = "CG"
    CH = "CH"
    CI = "CI"
    CK = "CK"
    CL = "CL"
    CM = "CM"
    CN = "CN"
    CO = "CO"
    CR = "CR"
    CS = "CS"
    CU = "CU"
    CV = "CV"
    CW = "CW"
    CX = "CX"
    CY = "CY"
    CZ = "CZ"
    DE = "DE"
    DJ = "DJ"
    DK = "DK"
    DM = "DM"
    DO = "DO"
    DZ = "DZ"
    EC = "EC"
    EE = "EE"
    EG = "EG"
    EH = "EH"
    ER = "ER"
    ES = "ES"
    ET = "ET"
    FI = "FI"
    FJ = "FJ"
    FK = "FK"
    FM = "FM"
    FO = "FO"
    FR = "FR"
    GA = "GA"
    GB = "GB"
    GD = "GD"
    GE = "GE"
    GF = "GF"
    GG = "GG"
    GH = "GH"
    GI = "GI"
    GL = "GL"
    GM = "GM"
    GN = "GN"
    GP = "GP"
    GQ = "GQ"
    GR = "GR"
    GS = "GS"
    GT = "GT"
    GU = "GU"
    GW = "GW"
    GY = "GY"
    HK = "HK"
    HM = "HM"
    HN = "HN"
    HR = "HR"
    HT = "HT"
    HU = "HU"
    ID = "ID"
    IE = "IE"
    IL = "IL"
    IM = "IM"
    IN = "IN"
    IO = "IO"
    IQ = "IQ"
    IR = "IR"
    IS = "IS"
    IT = "IT"
    JE = "JE"
    JM = "JM"
    JO = "JO"
    JP = "JP"
    KE = "KE"
    KG = "KG"
    KH = "KH"
    KI = "KI"
    KM = "KM"
    KN = "KN"
    KP = "KP"
    KR = "KR"
    KW = "KW"
    KY = "KY"
    KZ = "KZ"
    LA = "LA"
    LB = "LB"
    LC = "LC"
    LI = "LI"
    LK = "LK"
    LR = "LR"
    LS = "LS"
    LT = "LT"
    LU = "LU"
    LV = "LV"
    LY = "LY"
    MA = "MA"
    MC = "MC"
    MD = "MD"
    ME = "ME"
    MF = "MF"
    MG = "MG"
    MH = "MH"
    MK = "MK"
    ML = "ML"
    MM = "MM"
    MN = "MN"
    MO = "MO"
    MP = "MP"
    MQ = "MQ"
    MR = "MR"
    MS = "MS"
    MT = "MT"
    MU = "MU"
    MV = "MV"
    MW = "MW"
    MX = "MX"
    MY = "MY"
    MZ = "MZ"
    NA = "NA"
    NC = "NC"
    NE = "NE"
    NF = "NF"
    NG = "NG"
    NI = "NI"
    NL = "NL"
    NO = "NO"
    NP = "NP"
    NR = "NR"
    NU = "NU"
    NZ = "NZ"
    OM = "OM"
    PA = "PA"
    PE = "PE"
    PF = "PF"
    PG = "PG"
    PH = "PH"
    PK = "PK"
    PL = "PL"
    PM = "PM"
    PN = "PN"
    PR = "PR"
    PS = "PS"
    PT = "PT"
    PW = "PW"
    PY = "PY"
    QA = "QA"
    RE = "RE"
    RO = "RO"
    RS = "RS"
    RU = "RU"
    RW = "RW"
    SA = "SA"
    SB = "SB"
    SC = "SC"
    SD = "SD"
    SE = "SE"
    SG = "SG"
    SH = "SH"
    SI = "SI"
    SJ = "SJ"
    SK = "SK"
    SL = "SL"
    SM = "SM"
    SN = "SN"
    SO = "SO"
    SR = "SR"
    SS = "SS"
    ST = "ST"
    SV = "SV"
    SX = "SX"
    SY = "SY"
    SZ = "SZ"
    TC = "TC"
    TD = "TD"
    TF = "TF"
    TG = "TG"
    TH = "TH"
    TJ = "TJ"
    TK = "TK"
    TL = "TL"
    TM = "TM"
    TN = "TN"
    TO = "TO"
    TR = "TR"
    TT = "TT"
    TV = "TV"
    TW = "TW"
    TZ = "TZ"
    UA = "UA"
    UG = "UG"
    UM = "UM"
    US = "US"
    UY = "UY"
    UZ = "UZ"
    VA = "VA"
    VC = "VC"
    VE = "VE"
    VG = "VG"
    VI = "VI"
    VN = "VN"
    VU = "VU"
    WF = "WF"
    WS = "WS"
    XK = "XK"
    YE = "YE"
    YT = "YT"
    ZA = "ZA"
    ZM = "ZM"
    ZW = "ZW"

    @property
    def alpha2(self) -> str:
        return self.value

    @property
    def alpha3(self) -> str:
        return _describe(self.value)[1]

    @property
    def display_name(self) -> str:
        return _describe(self.value)[0]

    @property
    def transitional_period_start(self) -> Optional[str]:
        """Year-month (``YYYY-MM``) from which a withdrawn code is only tolerated."""
        return _TRANSITIONAL_PERIODS.get(self.value)

    @property
    def is_transitional(self) -> bool:
        return self.value in _TRANSITIONAL_PERIODS

    @classmethod
    def get_by_code(cls, code: Optional[str]) -> Optional["CountryCode"]:
        """Resolve an alpha-2 or alpha-3 code, case-insensitively."""
        if not isinstance(code, str):
            return None
        upper = code.upper()
        if len(upper) == 2:
            try:
                return cls(upper)
            except ValueError:
                return None
        if len(upper) == 3:
            alpha2 = _ALPHA3_TO_ALPHA2.get(upper)
            return cls(alpha2) if alpha2 else None
        return None

    def __str__(self) -> str:
        return self.value


# (English name, alpha-3) for codes iso3166 does not list
_LOCAL_COUNTRIES: Dict[str, Tuple[str, str]] = {
    "XK": ("Kosovo", "XKX"),
    "AN": ("Netherlands Antilles", "ANT"),
    "CS": ("Serbia and Montenegro", "SCG"),
}

_TRANSITIONAL_PERIODS: Dict[str, str] = {
    "AN": "2010-12",
    "CS": "2006-09",
}


def _describe(alpha2: str) -> Tuple[str, str]:
    local = _LOCAL_COUNTRIES.get(alpha2)
    if local is not None:
        return local
    country = iso3166.countries_by_alpha2.get(alpha2)
    if country is None:
        return alpha2, ""
    return country.name, country.alpha3


def _build_alpha3_index() -> Dict[str, str]:
    index: Dict[str, str] = {}
    for member in CountryCode:
        alpha3 = member.alpha3
        if alpha3:
            index[alpha3] = member.value
    return index


_ALPHA3_TO_ALPHA2: Dict[str, str] = _build_alpha3_index()


__all__ = ["CountryCode"]

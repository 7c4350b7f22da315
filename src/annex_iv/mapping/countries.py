"""EEA membership and country code classification for AIFMD reporting.

Country names are matched exactly as written; two-letter codes are matched
case-insensitively. Geographic focus labels resolve through a fixed tier
order (ISO code, aggregate region, member state, common non-EEA name) before
falling back to the ESMA supranational code.
"""

import re
from types import MappingProxyType

import structlog

from annex_iv.mapping.rules import ClassificationRule, classify, equals

logger = structlog.get_logger(__name__)

SUPRANATIONAL_CODE = "XS"

ISO_ALPHA2_PATTERN = re.compile(r"[A-Z]{2}")

# ISO 3166-1 alpha-2 codes of EU member states plus Liechtenstein, Norway, Iceland
DOMICILE_TO_MEMBER_STATE = MappingProxyType({
    "Luxembourg": "LU",
    "Ireland": "IE",
    "Germany": "DE",
    "France": "FR",
    "Netherlands": "NL",
    "Italy": "IT",
    "Spain": "ES",
    "Belgium": "BE",
    "Austria": "AT",
    "Malta": "MT",
    "Cyprus": "CY",
    "Estonia": "EE",
    "Portugal": "PT",
    "Finland": "FI",
    "Sweden": "SE",
    "Denmark": "DK",
    "Lithuania": "LT",
    "Latvia": "LV",
    "Slovenia": "SI",
    "Slovakia": "SK",
    "Greece": "GR",
    "Croatia": "HR",
    "Romania": "RO",
    "Bulgaria": "BG",
    "Czech Republic": "CZ",
    "Hungary": "HU",
    "Poland": "PL",
    "Liechtenstein": "LI",
    "Norway": "NO",
    "Iceland": "IS",
})

EEA_NAMES = frozenset(DOMICILE_TO_MEMBER_STATE)
EEA_CODES = frozenset(DOMICILE_TO_MEMBER_STATE.values())

# Aggregate regions report under the supranational code, except North America
REGION_AGGREGATES = MappingProxyType({
    "Eurozone (ex DE)": SUPRANATIONAL_CODE,
    "Westeuropa (ex DE)": SUPRANATIONAL_CODE,
    "Nordamerika": "US",
    "Asien-Pazifik": SUPRANATIONAL_CODE,
    "Benelux": SUPRANATIONAL_CODE,
    "Western Europe": SUPRANATIONAL_CODE,
    "Southern Europe": SUPRANATIONAL_CODE,
    "Central Europe": SUPRANATIONAL_CODE,
    "Northern Europe": SUPRANATIONAL_CODE,
    "Eastern Europe": SUPRANATIONAL_CODE,
    "Emerging Markets": SUPRANATIONAL_CODE,
    "Global": SUPRANATIONAL_CODE,
    "Eurozone": SUPRANATIONAL_CODE,
    "North America": "US",
    "Asia-Pacific": SUPRANATIONAL_CODE,
    "Asia Pacific": SUPRANATIONAL_CODE,
    "Latin America": SUPRANATIONAL_CODE,
    "Middle East": SUPRANATIONAL_CODE,
    "Sub-Saharan Africa": SUPRANATIONAL_CODE,
})

NON_EEA_COUNTRIES = MappingProxyType({
    "United States": "US",
    "USA": "US",
    "United Kingdom": "GB",
    "UK": "GB",
    "Switzerland": "CH",
    "Japan": "JP",
    "China": "CN",
    "Singapore": "SG",
    "Hong Kong": "HK",
    "Australia": "AU",
    "Canada": "CA",
    "Brazil": "BR",
    "Cayman Islands": "KY",
    "British Virgin Islands": "VG",
    "Jersey": "JE",
    "Guernsey": "GG",
    "Bermuda": "BM",
    "Mauritius": "MU",
    "Deutschland": "DE",
})


def _table_rules(tier: str, table) -> tuple[ClassificationRule, ...]:
    return tuple(
        ClassificationRule(name=f"{tier}:{label}", predicate=equals(label), code=code)
        for label, code in table.items()
    )


# Tier order is significant: aggregates, then member states, then other countries
REGION_RULES: tuple[ClassificationRule, ...] = (
    _table_rules("aggregate", REGION_AGGREGATES)
    + _table_rules("member_state", DOMICILE_TO_MEMBER_STATE)
    + _table_rules("non_eea", NON_EEA_COUNTRIES)
)


def is_eea_domicile(domicile: str) -> bool:
    """Check whether a domicile (country name or ISO code) is in the EEA."""
    return domicile in EEA_NAMES or domicile.upper() in EEA_CODES


def map_domicile_to_member_state(domicile: str) -> str:
    """Map a domicile name to an ESMA ReportingMemberState code.

    Unknown domiciles fall back to their first two characters, upper-cased.
    """
    code = DOMICILE_TO_MEMBER_STATE.get(domicile)
    if code is None:
        code = domicile[:2].upper()
        logger.debug("member_state_fallback", domicile=domicile, code=code)
    return code


def to_iso_country_code(region: str) -> str:
    """Convert a geographic focus label to an ISO 3166-1 alpha-2 code.

    Args:
        region: ISO code, aggregate region, or country name

    Returns:
        Two-letter code; aggregate and unknown regions map to ``XS``
    """
    if ISO_ALPHA2_PATTERN.fullmatch(region):
        return region

    code = classify(REGION_RULES, region, default="")
    if not code:
        logger.debug("region_code_fallback", region=region, code=SUPRANATIONAL_CODE)
        return SUPRANATIONAL_CODE
    return code

"""ESMA code mapping for AIFMD Annex IV reporting.

Derives regulator enumeration codes from free-text domain strings. The
keyword rule tables are ordered: when an input matches several keyword
families, the earliest rule wins.
"""

from enum import Enum
from typing import Any, Iterable, Optional

import structlog

from annex_iv.mapping.rules import ClassificationRule, classify, contains_any, equals

logger = structlog.get_logger(__name__)


class ReportingFrequencyCode(str, Enum):
    """AIFMReportingObligationChangeFrequencyCode values."""

    YEARLY = "Y"
    HALF_YEARLY = "H"
    QUARTERLY = "Q"


class PredominantAIFType(str, Enum):
    """PredominantAIFType values."""

    REAL_ESTATE = "REST"
    HEDGE_FUND = "HFND"
    PRIVATE_EQUITY = "PEQF"
    FUND_OF_FUNDS = "FOFS"
    VENTURE_CAPITAL = "VCAP"
    INFRASTRUCTURE = "INFR"
    COMMODITY = "COMF"
    OTHER = "OTHR"


class DepositaryTypeCode(str, Enum):
    """DepositaryType values."""

    CREDIT_INSTITUTION = "CDPS"
    INVESTMENT_FIRM = "INVF"
    OTHER = "OTHR"


class SubAssetTypeCode(str, Enum):
    """SubAssetType values used for main instruments."""

    LISTED_EQUITY = "SEC_LEQ_IFIN"
    BOND = "SEC_CSH_BOND"
    EQUITY_DERIVATIVE_SWAP = "DER_EQD_SWPS"
    RESIDENTIAL_REAL_ESTATE = "PHY_RES_RESD"
    MONEY_MARKET = "SEC_CSH_MMKT"
    NO_TYPE = "NTA_NTA_NOTA"


# Article 24(4) is checked before 24(2); anything else reports yearly
FREQUENCY_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule("article_24_4", contains_any("24(4)"), ReportingFrequencyCode.QUARTERLY.value),
    ClassificationRule("article_24_2", contains_any("24(2)"), ReportingFrequencyCode.HALF_YEARLY.value),
)

# Real estate first: REIT/property names often carry other strategy keywords too
PREDOMINANT_TYPE_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        "real_estate",
        contains_any("immobilien", "real estate", "reit", "property"),
        PredominantAIFType.REAL_ESTATE.value,
    ),
    ClassificationRule("hedge", contains_any("hedge"), PredominantAIFType.HEDGE_FUND.value),
    ClassificationRule(
        "private_equity", contains_any("private equity"), PredominantAIFType.PRIVATE_EQUITY.value
    ),
    ClassificationRule(
        "fund_of_funds",
        contains_any("fund of fund", "fof", "dachfonds"),
        PredominantAIFType.FUND_OF_FUNDS.value,
    ),
    ClassificationRule("venture", contains_any("venture"), PredominantAIFType.VENTURE_CAPITAL.value),
    ClassificationRule(
        "infrastructure",
        contains_any("infrastructure", "infrastruktur"),
        PredominantAIFType.INFRASTRUCTURE.value,
    ),
    ClassificationRule(
        "commodity", contains_any("commodity", "rohstoff"), PredominantAIFType.COMMODITY.value
    ),
)

# "Spezial" contains "pe", so German special funds are excluded explicitly
LEGAL_FORM_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        "legal_form_private_equity",
        lambda form: "pe" in form and "spezial" not in form,
        PredominantAIFType.PRIVATE_EQUITY.value,
    ),
)

DEPOSITARY_TYPES = {
    "credit_institution": DepositaryTypeCode.CREDIT_INSTITUTION.value,
    "investment_firm": DepositaryTypeCode.INVESTMENT_FIRM.value,
}

# Fund share and unit classes are reported as equity-like instruments
ASSET_TYPE_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        "fund_share_class",
        lambda label: equals("fund")(label) or contains_any("share class", "unit class")(label),
        SubAssetTypeCode.LISTED_EQUITY.value,
    ),
    ClassificationRule("equity", contains_any("equity", "share"), SubAssetTypeCode.LISTED_EQUITY.value),
    ClassificationRule("bond", contains_any("bond", "debt", "fixed"), SubAssetTypeCode.BOND.value),
    ClassificationRule(
        "derivative", contains_any("derivative", "swap"), SubAssetTypeCode.EQUITY_DERIVATIVE_SWAP.value
    ),
    ClassificationRule(
        "real_estate",
        contains_any("real estate", "property"),
        SubAssetTypeCode.RESIDENTIAL_REAL_ESTATE.value,
    ),
    ClassificationRule(
        "cash", contains_any("cash", "money market"), SubAssetTypeCode.MONEY_MARKET.value
    ),
)


def map_reporting_obligation_to_frequency_code(obligation: str) -> str:
    """Map a reporting obligation (Article reference) to an ESMA frequency code.

    Art. 24(1): yearly ("Y"), Art. 24(2): half-yearly ("H"),
    Art. 24(4): quarterly ("Q").
    """
    return classify(FREQUENCY_RULES, obligation, default=ReportingFrequencyCode.YEARLY.value)


def map_to_predominant_aif_type(legal_form: Optional[str], fund_name: Optional[str] = None) -> str:
    """Map fund name and legal form to an ESMA PredominantAIFType code.

    Strategy keywords in the name or legal form take precedence over the
    legal form on its own.
    """
    name_and_form = f"{fund_name or ''} {legal_form or ''}".lower()
    code = classify(PREDOMINANT_TYPE_RULES, name_and_form, default="")
    if code:
        return code

    code = classify(LEGAL_FORM_RULES, (legal_form or "").lower(), default="")
    if code:
        return code

    logger.debug("predominant_type_fallback", legal_form=legal_form, fund_name=fund_name)
    return PredominantAIFType.OTHER.value


def map_depositary_type(depositary_type: Optional[str]) -> str:
    """Map a depositary type to an ESMA DepositaryType code."""
    return DEPOSITARY_TYPES.get(depositary_type or "", DepositaryTypeCode.OTHER.value)


def map_asset_type(asset_type: Optional[str]) -> str:
    """Map a free-text asset type label to an ESMA SubAssetType code."""
    return classify(
        ASSET_TYPE_RULES, (asset_type or "").lower(), default=SubAssetTypeCode.NO_TYPE.value
    )


def get_type_pct(by_type: Iterable[Any], investor_type: str) -> float:
    """Get percentage_of_nav for an investor type from a by-type breakdown.

    Entries may be models or plain mappings. Returns 0 when the type is absent.
    """
    for entry in by_type:
        if isinstance(entry, dict):
            entry_type, pct = entry.get("investor_type"), entry.get("percentage_of_nav")
        else:
            entry_type, pct = entry.investor_type, entry.percentage_of_nav
        if entry_type == investor_type:
            return pct or 0
    return 0

"""Classification of domain strings into ESMA reporting codes."""

from annex_iv.mapping.rules import (
    ClassificationRule,
    classify,
    first_match,
)
from annex_iv.mapping.countries import (
    is_eea_domicile,
    map_domicile_to_member_state,
    to_iso_country_code,
    DOMICILE_TO_MEMBER_STATE,
    REGION_AGGREGATES,
    NON_EEA_COUNTRIES,
    SUPRANATIONAL_CODE,
)
from annex_iv.mapping.esma_codes import (
    map_reporting_obligation_to_frequency_code,
    map_to_predominant_aif_type,
    map_depositary_type,
    map_asset_type,
    get_type_pct,
    ReportingFrequencyCode,
    PredominantAIFType,
    DepositaryTypeCode,
    SubAssetTypeCode,
)

__all__ = [
    # Rules
    "ClassificationRule",
    "classify",
    "first_match",
    # Countries
    "is_eea_domicile",
    "map_domicile_to_member_state",
    "to_iso_country_code",
    "DOMICILE_TO_MEMBER_STATE",
    "REGION_AGGREGATES",
    "NON_EEA_COUNTRIES",
    "SUPRANATIONAL_CODE",
    # ESMA codes
    "map_reporting_obligation_to_frequency_code",
    "map_to_predominant_aif_type",
    "map_depositary_type",
    "map_asset_type",
    "get_type_pct",
    "ReportingFrequencyCode",
    "PredominantAIFType",
    "DepositaryTypeCode",
    "SubAssetTypeCode",
]

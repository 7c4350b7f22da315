"""AIFMD Annex IV XML serialization.

Takes an ``AnnexIVReport`` and produces ESMA-compliant Annex IV XML, either
for a single fund or as a manager-level aggregate.
"""

__version__ = "0.1.0"

from annex_iv.models import AnnexIVReport, load_report, load_reports
from annex_iv.serialization import (
    serialize_annex_iv_to_xml,
    serialize_aggregate_annex_iv_to_xml,
    escape_xml,
    tag,
)
from annex_iv.mapping import (
    is_eea_domicile,
    map_domicile_to_member_state,
    to_iso_country_code,
    map_reporting_obligation_to_frequency_code,
    map_to_predominant_aif_type,
    map_depositary_type,
    map_asset_type,
    get_type_pct,
)

__all__ = [
    "AnnexIVReport",
    "load_report",
    "load_reports",
    "serialize_annex_iv_to_xml",
    "serialize_aggregate_annex_iv_to_xml",
    "escape_xml",
    "tag",
    "is_eea_domicile",
    "map_domicile_to_member_state",
    "to_iso_country_code",
    "map_reporting_obligation_to_frequency_code",
    "map_to_predominant_aif_type",
    "map_depositary_type",
    "map_asset_type",
    "get_type_pct",
]

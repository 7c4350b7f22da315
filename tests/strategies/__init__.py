"""
Hypothesis strategies for property-based testing.

Contains test data generators for Annex IV report models and the
free-text inputs of the code mappers.
"""

from tests.strategies.report_strategies import (
    xml_text_strategy,
    fund_name_strategy,
    non_empty_string_strategy,
    eea_domicile_strategy,
    iso_code_strategy,
    region_label_strategy,
    reporting_obligation_strategy,
    asset_position_strategy,
    counterparty_strategy,
    report_data_strategy,
    annex_iv_report_strategy,
)

__all__ = [
    "xml_text_strategy",
    "fund_name_strategy",
    "non_empty_string_strategy",
    "eea_domicile_strategy",
    "iso_code_strategy",
    "region_label_strategy",
    "reporting_obligation_strategy",
    "asset_position_strategy",
    "counterparty_strategy",
    "report_data_strategy",
    "annex_iv_report_strategy",
]

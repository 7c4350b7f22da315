"""Pytest configuration and shared fixtures for Annex IV tests."""

import copy

import pytest
from hypothesis import settings, Verbosity

from annex_iv.models import AnnexIVReport

settings.register_profile(
    "default",
    max_examples=100,
    deadline=5000,
    suppress_health_check=[],
    verbosity=Verbosity.normal,
)

settings.register_profile(
    "ci",
    max_examples=200,
    deadline=10000,
    suppress_health_check=[],
    verbosity=Verbosity.quiet,
)

settings.register_profile(
    "debug",
    max_examples=10,
    deadline=None,
    suppress_health_check=[],
    verbosity=Verbosity.verbose,
)

settings.load_profile("default")


SAMPLE_REPORT_DATA = {
    "aif_identification": {
        "reporting_period": {"start": "2024-01-01", "end": "2024-03-31"},
        "aif_name": "Test Immobilien Fonds I",
        "aif_national_code": "DE-TEST-001",
        "aif_type": "Spezial_AIF",
        "domicile": "Germany",
        "inception_date": "2020-06-15",
        "aifm_name": "Test KVG GmbH",
        "aifm_lei": "529900TESTLEI000001",
        "reporting_obligation": "Article 24(2)",
        "base_currency": "EUR",
    },
    "investor_concentration": {
        "total_investors": 25,
        "by_type": [
            {"investor_type": "professional", "count": 20, "percentage_of_nav": 85.5},
            {"investor_type": "retail", "count": 5, "percentage_of_nav": 14.5},
        ],
        "by_domicile": [
            {"domicile": "DE", "count": 18, "percentage_of_nav": 72},
            {"domicile": "LU", "count": 7, "percentage_of_nav": 28},
        ],
        "beneficial_owners_concentration": {"top_5_investors_pct": 62.3},
    },
    "principal_exposures": {
        "total_aum_units": 100000,
        "total_allocated_units": 85000,
        "total_aum_eur": 250000000,
        "total_nav_eur": 212500000,
        "utilization_pct": 85,
        "asset_breakdown": [
            {"asset_name": "Office Berlin", "asset_type": "real estate", "units": 1,
             "value_eur": 120000000, "percentage_of_total": 56.5},
            {"asset_name": "Residential Munich", "asset_type": "real estate", "units": 1,
             "value_eur": 80000000, "percentage_of_total": 37.6},
            {"asset_name": "Cash Reserve", "asset_type": "cash", "units": 12500000,
             "value_eur": 12500000, "percentage_of_total": 5.9},
        ],
    },
    "depositary": {
        "name": "Deutsche Depositary AG",
        "lei": "529900DEPOEXAMPLE01",
        "jurisdiction": "DE",
        "type": "credit_institution",
    },
    "sub_asset_type": "PHY_RES_RESD",
    "leverage": {
        "commitment_method": 1.2,
        "gross_method": 1.5,
        "commitment_limit": 2.0,
        "gross_limit": 3.0,
        "leverage_compliant": True,
    },
    "risk_profile": {
        "liquidity": {
            "investor_redemption_frequency": "Quarterly",
            "portfolio_liquidity_profile": [
                {"bucket": "31-90d", "pct": 5.9},
                {"bucket": ">365d", "pct": 94.1},
            ],
            "liquidity_management_tools": [
                {"type": "notice_period", "description": "90 days notice", "active": True},
            ],
        },
        "operational": {"total_open_risk_flags": 2, "high_severity_flags": 0},
    },
    "geographic_focus": [
        {"region": "Germany", "pct": 85},
        {"region": "Eurozone (ex DE)", "pct": 15},
    ],
    "counterparty_risk": {
        "top_5_counterparties": [
            {"name": "Deutsche Bank AG", "lei": "7LTWFZYICNSX8D621K86", "exposure_pct": 12.5},
        ],
        "total_counterparty_count": 3,
    },
    "compliance_status": {
        "kyc_coverage_pct": 96,
        "eligible_investor_pct": 100,
        "recent_violations": 0,
        "last_compliance_check": "2024-03-31T12:00:00Z",
    },
    "generated_at": "2024-03-31T14:00:00Z",
    "report_version": "1.0",
    "disclaimer": "Test disclaimer text.",
}


MINIMAL_REPORT_DATA = {
    "aif_identification": {
        "reporting_period": {"start": "2025-01-01", "end": "2025-12-31"},
        "aif_name": "Minimal Fund",
        "aif_national_code": "DE-MIN-001",
        "aif_type": "AIF",
        "domicile": "Germany",
        "inception_date": None,
        "aifm_name": None,
        "aifm_lei": None,
        "reporting_obligation": "Article 24(1)",
        "base_currency": "EUR",
    },
    "investor_concentration": {
        "total_investors": 0,
        "by_type": [],
        "by_domicile": [],
        "beneficial_owners_concentration": {"top_5_investors_pct": 0},
    },
    "principal_exposures": {
        "total_aum_units": 0,
        "total_allocated_units": 0,
        "total_aum_eur": 0,
        "total_nav_eur": 0,
        "utilization_pct": 0,
        "asset_breakdown": [],
    },
    "depositary": {"name": None, "lei": None, "jurisdiction": None, "type": None},
    "sub_asset_type": "OTHR_OTHR",
    "leverage": {
        "commitment_method": None,
        "gross_method": None,
        "commitment_limit": None,
        "gross_limit": None,
        "leverage_compliant": True,
    },
    "risk_profile": {
        "liquidity": {
            "investor_redemption_frequency": "Not applicable",
            "portfolio_liquidity_profile": [],
            "liquidity_management_tools": [],
        },
        "operational": {"total_open_risk_flags": 0, "high_severity_flags": 0},
    },
    "geographic_focus": [],
    "counterparty_risk": {"top_5_counterparties": [], "total_counterparty_count": 0},
    "compliance_status": {
        "kyc_coverage_pct": 0,
        "eligible_investor_pct": 0,
        "recent_violations": 0,
        "last_compliance_check": "2025-12-31T00:00:00Z",
    },
    "generated_at": "2025-12-31T12:00:00Z",
    "report_version": "1.0",
    "disclaimer": "",
}


@pytest.fixture
def sample_report_data():
    """Fully populated report as plain data; safe to mutate."""
    return copy.deepcopy(SAMPLE_REPORT_DATA)


@pytest.fixture
def minimal_report_data():
    """Report with every optional field empty; safe to mutate."""
    return copy.deepcopy(MINIMAL_REPORT_DATA)


@pytest.fixture
def sample_report(sample_report_data):
    return AnnexIVReport.model_validate(sample_report_data)


@pytest.fixture
def minimal_report(minimal_report_data):
    return AnnexIVReport.model_validate(minimal_report_data)

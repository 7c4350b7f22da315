"""Data models for Annex IV reports."""

from annex_iv.models.report import (
    AnnexIVReport,
    AIFIdentification,
    ReportingPeriod,
    ReportingObligation,
    InvestorConcentration,
    InvestorTypeBreakdown,
    InvestorDomicileBreakdown,
    BeneficialOwnersConcentration,
    PrincipalExposures,
    AssetPosition,
    Depositary,
    Leverage,
    RiskProfile,
    LiquidityProfile,
    LiquidityBucket,
    LiquidityBucketPeriod,
    LiquidityManagementTool,
    LiquidityManagementToolType,
    OperationalRisk,
    GeographicExposure,
    CounterpartyExposure,
    CounterpartyRisk,
    ComplianceStatus,
    load_report,
    load_reports,
)

__all__ = [
    "AnnexIVReport",
    "AIFIdentification",
    "ReportingPeriod",
    "ReportingObligation",
    "InvestorConcentration",
    "InvestorTypeBreakdown",
    "InvestorDomicileBreakdown",
    "BeneficialOwnersConcentration",
    "PrincipalExposures",
    "AssetPosition",
    "Depositary",
    "Leverage",
    "RiskProfile",
    "LiquidityProfile",
    "LiquidityBucket",
    "LiquidityBucketPeriod",
    "LiquidityManagementTool",
    "LiquidityManagementToolType",
    "OperationalRisk",
    "GeographicExposure",
    "CounterpartyExposure",
    "CounterpartyRisk",
    "ComplianceStatus",
    "load_report",
    "load_reports",
]

"""Annex IV report data models.

Pydantic models for the data required by ESMA AIFMD Annex IV (Article 24)
reporting. A report is assembled by an upstream collaborator and is treated
as read-only by the serializer.
"""

import json
from datetime import date
from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from annex_iv.core.errors import ReportValidationError


class ReportingObligation(str, Enum):
    """AIFMD Article 24 reporting obligations."""

    ARTICLE_24_1 = "Article 24(1)"
    ARTICLE_24_2 = "Article 24(2)"
    ARTICLE_24_4 = "Article 24(4)"


class LiquidityBucketPeriod(str, Enum):
    """Time horizons of the portfolio liquidity profile."""

    ONE_DAY = "1d"
    TWO_TO_SEVEN_DAYS = "2-7d"
    EIGHT_TO_THIRTY_DAYS = "8-30d"
    THIRTY_ONE_TO_NINETY_DAYS = "31-90d"
    NINETY_ONE_TO_180_DAYS = "91-180d"
    HALF_YEAR_TO_ONE_YEAR = "181-365d"
    OVER_ONE_YEAR = ">365d"


class LiquidityManagementToolType(str, Enum):
    """Liquidity management tools available to the AIF."""

    REDEMPTION_GATE = "redemption_gate"
    NOTICE_PERIOD = "notice_period"
    REDEMPTION_FEE = "redemption_fee"
    SWING_PRICING = "swing_pricing"
    ANTI_DILUTION_LEVY = "anti_dilution_levy"
    SIDE_POCKET = "side_pocket"
    REDEMPTION_IN_KIND = "redemption_in_kind"
    SUSPENSION = "suspension"


def _calendar_date(value: Any) -> Any:
    """Accept ISO timestamps where a calendar date is expected."""
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    return value


class _ReportModel(BaseModel):
    model_config = {"frozen": True}


class ReportingPeriod(_ReportModel):
    """Reporting period boundaries."""

    start: date = Field(..., description="First day of the reporting period")
    end: date = Field(..., description="Last day of the reporting period")

    @field_validator("start", "end", mode="before")
    @classmethod
    def normalize_dates(cls, value: Any) -> Any:
        return _calendar_date(value)


class AIFIdentification(_ReportModel):
    """Identification of the AIF and its manager."""

    reporting_period: ReportingPeriod
    aif_name: str = Field(..., description="Fund name")
    aif_national_code: str = Field(..., description="National fund identifier")
    aif_type: str = Field(..., description="Legal form of the fund")
    domicile: str = Field(..., description="Country name or ISO code of the fund domicile")
    inception_date: Optional[date] = Field(None, description="Fund inception date")
    aifm_name: Optional[str] = Field(None, description="Manager name")
    aifm_lei: Optional[str] = Field(None, description="Manager legal entity identifier")
    reporting_obligation: ReportingObligation
    base_currency: str = Field(..., description="ISO 4217 base currency")

    @field_validator("inception_date", mode="before")
    @classmethod
    def normalize_inception_date(cls, value: Any) -> Any:
        return _calendar_date(value)


class InvestorTypeBreakdown(_ReportModel):
    investor_type: str
    count: int = Field(..., ge=0)
    percentage_of_nav: float = Field(..., ge=0)


class InvestorDomicileBreakdown(_ReportModel):
    domicile: str
    count: int = Field(..., ge=0)
    percentage_of_nav: float = Field(..., ge=0)


class BeneficialOwnersConcentration(_ReportModel):
    top_5_investors_pct: float = Field(..., ge=0)


class InvestorConcentration(_ReportModel):
    """Investor base broken down by category and by domicile."""

    total_investors: int = Field(..., ge=0)
    by_type: list[InvestorTypeBreakdown] = Field(default_factory=list)
    by_domicile: list[InvestorDomicileBreakdown] = Field(default_factory=list)
    beneficial_owners_concentration: BeneficialOwnersConcentration


class AssetPosition(_ReportModel):
    asset_name: str
    asset_type: str = Field(..., description="Free-text asset type label")
    units: float
    value_eur: float
    percentage_of_total: float = Field(..., ge=0)


class PrincipalExposures(_ReportModel):
    """Aggregate AUM/NAV figures and the ordered asset breakdown."""

    total_aum_units: float
    total_allocated_units: float
    total_aum_eur: float
    total_nav_eur: float
    utilization_pct: float = Field(..., ge=0)
    asset_breakdown: list[AssetPosition] = Field(default_factory=list)


class Depositary(_ReportModel):
    name: Optional[str] = None
    lei: Optional[str] = None
    jurisdiction: Optional[str] = None
    type: Optional[str] = Field(None, description="e.g. credit_institution, investment_firm")


class Leverage(_ReportModel):
    """Leverage under the gross and commitment methods."""

    commitment_method: Optional[float] = None
    gross_method: Optional[float] = None
    commitment_limit: Optional[float] = None
    gross_limit: Optional[float] = None
    leverage_compliant: bool = True


class LiquidityBucket(_ReportModel):
    bucket: LiquidityBucketPeriod
    pct: float = Field(..., ge=0)


class LiquidityManagementTool(_ReportModel):
    type: LiquidityManagementToolType
    description: str
    threshold_pct: Optional[float] = None
    active: bool


class LiquidityProfile(_ReportModel):
    investor_redemption_frequency: str
    portfolio_liquidity_profile: list[LiquidityBucket] = Field(default_factory=list)
    liquidity_management_tools: list[LiquidityManagementTool] = Field(default_factory=list)


class OperationalRisk(_ReportModel):
    total_open_risk_flags: int = Field(..., ge=0)
    high_severity_flags: int = Field(..., ge=0)


class RiskProfile(_ReportModel):
    liquidity: LiquidityProfile
    operational: OperationalRisk


class GeographicExposure(_ReportModel):
    region: str = Field(..., description="Country, ISO code or aggregate region label")
    pct: float = Field(..., ge=0)


class CounterpartyExposure(_ReportModel):
    name: str
    lei: Optional[str] = None
    exposure_pct: float = Field(..., ge=0)


class CounterpartyRisk(_ReportModel):
    top_5_counterparties: list[CounterpartyExposure] = Field(default_factory=list, max_length=5)
    total_counterparty_count: int = Field(..., ge=0)


class ComplianceStatus(_ReportModel):
    kyc_coverage_pct: float = Field(..., ge=0)
    eligible_investor_pct: float = Field(..., ge=0)
    recent_violations: int = Field(..., ge=0)
    last_compliance_check: str = Field(..., description="ISO-8601 timestamp, emitted verbatim")


class AnnexIVReport(_ReportModel):
    """A complete Annex IV report for a single AIF."""

    aif_identification: AIFIdentification
    investor_concentration: InvestorConcentration
    principal_exposures: PrincipalExposures
    depositary: Optional[Depositary] = None
    sub_asset_type: str = Field("", description="Fund-level ESMA SubAssetType code")
    leverage: Leverage
    risk_profile: RiskProfile
    geographic_focus: list[GeographicExposure] = Field(default_factory=list)
    counterparty_risk: CounterpartyRisk
    compliance_status: ComplianceStatus
    generated_at: str = Field(..., description="ISO-8601 timestamp, emitted verbatim")
    report_version: Literal["1.0"] = "1.0"
    disclaimer: str = ""


def _failed_checks(error: ValidationError) -> list[str]:
    return [
        f"{'.'.join(str(part) for part in issue['loc'])}: {issue['msg']}"
        for issue in error.errors()
    ]


def load_report(data: Union[dict, str, bytes]) -> AnnexIVReport:
    """Validate raw report data into an AnnexIVReport.

    Args:
        data: Report as a dict or a JSON document

    Returns:
        Validated, immutable report

    Raises:
        ReportValidationError: If the data does not describe a complete report
    """
    try:
        if isinstance(data, (str, bytes)):
            return AnnexIVReport.model_validate_json(data)
        return AnnexIVReport.model_validate(data)
    except ValidationError as e:
        national_code = None
        section = data.get("aif_identification") if isinstance(data, dict) else None
        if isinstance(section, dict):
            national_code = section.get("aif_national_code")
        raise ReportValidationError(
            f"Invalid Annex IV report: {e.error_count()} validation error(s)",
            aif_national_code=national_code,
            failed_checks=_failed_checks(e),
        ) from e


def load_reports(data: Union[list, str, bytes]) -> list[AnnexIVReport]:
    """Validate a list of raw reports, preserving input order."""
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise ReportValidationError(
                "Report list is not valid JSON", failed_checks=[str(e)]
            ) from e
    if not isinstance(data, list):
        raise ReportValidationError(
            "Expected a list of reports",
            failed_checks=[f"got {type(data).__name__}"],
        )
    return [load_report(item) for item in data]

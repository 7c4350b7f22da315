"""ESMA AIFMD Annex IV XML serializer.

Follows the ESMA AIFMD Reporting Technical Standards (ESMA/2013/1358) XSD
structure: AIFReportingInfo -> AIFMRecordInfo -> AIFRecordInfo -> sections.

Two modes are supported:
- ``serialize_annex_iv_to_xml``: one fund, full record
- ``serialize_aggregate_annex_iv_to_xml``: one manager record listing every
  fund managed, as ESMA expects for multi-fund AIFMs
"""

import math
from typing import Optional, Sequence

import structlog

from annex_iv.core.config import DEFAULT_CONFIG, SerializerConfig
from annex_iv.core.logging import report_context
from annex_iv.mapping.countries import (
    is_eea_domicile,
    map_domicile_to_member_state,
    to_iso_country_code,
)
from annex_iv.mapping.esma_codes import (
    get_type_pct,
    map_asset_type,
    map_depositary_type,
    map_reporting_obligation_to_frequency_code,
    map_to_predominant_aif_type,
)
from annex_iv.models.report import AIFIdentification, AnnexIVReport
from annex_iv.serialization.builder import (
    XmlElement,
    XmlNode,
    comment,
    element,
    node,
    render_document,
)
from annex_iv.serialization.xml_utils import escape_xml

logger = structlog.get_logger(__name__)

ROOT_ELEMENT = "AIFReportingInfo"


def reporting_period_labels(ident: AIFIdentification) -> tuple[str, str]:
    """Return (period type, period year) from the reporting period end date."""
    end = ident.reporting_period.end
    return f"Q{math.ceil(end.month / 3)}", str(end.year)


def reporting_code(member_state: str, marker: str, national_code: Optional[str]) -> str:
    """Composite reporting code: member state + marker + 8 chars of the national code."""
    return member_state + marker + (national_code or "")[:8].upper()


def _root(member_state: str, config: SerializerConfig, schema_location: bool) -> XmlElement:
    attrs = {
        "xmlns": config.namespace,
        "xmlns:xsi": config.xsi_namespace,
    }
    if schema_location:
        attrs["xsi:schemaLocation"] = config.schema_location
    attrs["ReportingMemberState"] = member_state
    return XmlElement(ROOT_ELEMENT, attrs=attrs, attrs_on_separate_lines=True)


def _aifm_header(
    ident: AIFIdentification,
    period_type: str,
    period_year: str,
    config: SerializerConfig,
) -> list[XmlNode]:
    return [
        element("AIFMNationalCode", ident.aifm_lei or config.pending_aifm_code),
        element("AIFMName", ident.aifm_name or config.unspecified_aifm_name),
        element("AIFMEEAFlag", is_eea_domicile(ident.domicile)),
        element("AIFMNoReportingFlag", False),
        element("ReportingPeriodType", period_type),
        element("ReportingPeriodYear", period_year),
        element(
            "AIFMReportingObligationChangeFrequencyCode",
            map_reporting_obligation_to_frequency_code(ident.reporting_obligation),
        ),
    ]


def _aifm_identity(ident: AIFIdentification, member_state: str) -> list[Optional[XmlNode]]:
    return [
        element("AIFMIdentifier", ident.aifm_lei or ident.aif_national_code),
        element("AIFMIdentifierLEI", ident.aifm_lei) if ident.aifm_lei else None,
        element("AIFMReportingCode", reporting_code(member_state, "AIFM", ident.aif_national_code)),
    ]


def _principal_info(report: AnnexIVReport, config: SerializerConfig) -> XmlElement:
    ident = report.aif_identification
    ic = report.investor_concentration
    pe = report.principal_exposures
    markets = report.geographic_focus[: config.max_principal_markets]

    return node(
        "AIFPrincipalInfo",
        element("AIFIdentification", ident.aif_national_code),
        node(
            "MainInstrumentsTraded",
            [
                node(
                    "MainInstrumentTraded",
                    element("SubAssetType", map_asset_type(asset.asset_type)),
                    element("InstrumentName", asset.asset_name),
                    element("PositionValue", asset.value_eur),
                    element("PositionRate", asset.percentage_of_total),
                )
                for asset in pe.asset_breakdown[: config.max_main_instruments]
            ],
        ),
        element("PredominantAIFType", map_to_predominant_aif_type(ident.aif_type, ident.aif_name)),
        element("SubAssetType", report.sub_asset_type or config.default_sub_asset_type),
        comment("NAV and GAV in EUR as required by ESMA Annex IV"),
        element("NetAssetValue", pe.total_nav_eur),
        element("GrossAssetValue", pe.total_aum_eur),
        element("BaseCurrencyDescription", ident.base_currency),
        node(
            "InvestorConcentration",
            element("ProfessionalInvestorConcentrationRate", get_type_pct(ic.by_type, "professional")),
            element("RetailInvestorConcentrationRate", get_type_pct(ic.by_type, "retail")),
            element(
                "TopFiveBeneficialOwnersRate",
                ic.beneficial_owners_concentration.top_5_investors_pct,
            ),
        ),
        node(
            "AifmPrincipalMarkets",
            [
                node(
                    "AIFMPrincipalMarket",
                    element("MarketIdentification", to_iso_country_code(market.region)),
                    element("AggregateValueAmount", market.pct),
                )
                for market in markets
            ],
        ) if markets else None,
    )


def _counterparty_profile(report: AnnexIVReport, config: SerializerConfig) -> Optional[XmlElement]:
    risk = report.counterparty_risk
    counterparties = risk.top_5_counterparties[: config.max_counterparties]
    if not counterparties:
        return None

    return node(
        "CounterpartyRiskProfile",
        element("TotalCounterpartyExposure", risk.total_counterparty_count),
        [
            node(
                "TopCounterparty",
                element("CounterpartyName", cp.name),
                element("CounterpartyLEI", cp.lei) if cp.lei else None,
                element("ExposureRate", cp.exposure_pct),
            )
            for cp in counterparties
        ],
    )


def _leverage_info(report: AnnexIVReport) -> XmlElement:
    lev = report.leverage
    has_limits = lev.gross_limit is not None or lev.commitment_limit is not None

    return node(
        "AIFLeverageInfo",
        node(
            "AIFLeverageArticle242",
            element("GrossMethodRate", lev.gross_method),
            element("CommitmentMethodRate", lev.commitment_method),
        ),
        node(
            "RegulatoryLeverageLimits",
            element("CommitmentMethodLimit", lev.commitment_limit)
            if lev.commitment_limit is not None else None,
            element("GrossMethodLimit", lev.gross_limit)
            if lev.gross_limit is not None else None,
            element("LeverageCompliant", lev.leverage_compliant),
        ) if has_limits else None,
    )


def _liquidity_profile(report: AnnexIVReport) -> XmlElement:
    liquidity = report.risk_profile.liquidity
    tools = liquidity.liquidity_management_tools

    return node(
        "LiquidityProfile",
        node(
            "PortfolioLiquidityProfile",
            [
                node(
                    "PortfolioLiquidityBucket",
                    element("BucketPeriod", bucket.bucket),
                    element("BucketRate", bucket.pct),
                )
                for bucket in liquidity.portfolio_liquidity_profile
            ],
        ),
        node(
            "InvestorLiquidityProfile",
            element("InvestorRedemptionFrequency", liquidity.investor_redemption_frequency),
        ),
        node(
            "LiquidityManagementTools",
            [
                node(
                    "LiquidityManagementTool",
                    element("LMTType", tool.type),
                    element("LMTActive", tool.active),
                    element("LMTDescription", tool.description),
                )
                for tool in tools
            ],
        ) if tools else None,
    )


def _individual_info(report: AnnexIVReport, config: SerializerConfig) -> XmlElement:
    ic = report.investor_concentration
    operational = report.risk_profile.operational

    return node(
        "AIFIndividualInfo",
        node(
            "IndividualExposure",
            [
                node(
                    "InvestorBreakdown",
                    element("InvestorCountry", entry.domicile),
                    element("InvestorCount", entry.count),
                    element("InvestorPercentage", entry.percentage_of_nav),
                )
                for entry in ic.by_domicile[: config.max_investor_domiciles]
            ],
        ),
        _counterparty_profile(report, config),
        _leverage_info(report),
        _liquidity_profile(report),
        node(
            "OperationalRisk",
            element("TotalOpenRiskFlags", operational.total_open_risk_flags),
            element("HighSeverityFlags", operational.high_severity_flags),
        ),
    )


def _depositary_info(report: AnnexIVReport, config: SerializerConfig) -> Optional[XmlElement]:
    dep = report.depositary
    if not dep or not dep.name:
        return None

    return node(
        "AIFDepositaryInfo",
        element("DepositaryName", dep.name),
        element("DepositaryLEI", dep.lei) if dep.lei else None,
        element("DepositaryCountry", dep.jurisdiction or config.default_depositary_country),
        element("DepositaryType", map_depositary_type(dep.type)),
    )


def _compliance_extension(report: AnnexIVReport, config: SerializerConfig) -> XmlElement:
    cs = report.compliance_status
    return node(
        config.compliance_extension_tag,
        element("KYCCoveragePct", cs.kyc_coverage_pct),
        element("EligibleInvestorPct", cs.eligible_investor_pct),
        element("RecentViolations", cs.recent_violations),
        element("LastComplianceCheck", cs.last_compliance_check),
    )


def _aif_record(
    report: AnnexIVReport,
    member_state: str,
    period_type: str,
    period_year: str,
    config: SerializerConfig,
) -> XmlElement:
    ident = report.aif_identification
    period = ident.reporting_period

    return node(
        "AIFRecordInfo",
        element("AIFNationalCode", ident.aif_national_code),
        element("AIFName", ident.aif_name),
        element("AIFEEAFlag", is_eea_domicile(ident.domicile)),
        element("AIFReportingCode", reporting_code(member_state, "AIF", ident.aif_national_code)),
        element("AIFDomicile", ident.domicile),
        element("AIFInceptionDate", ident.inception_date),
        element("ReportingPeriodType", period_type),
        element("ReportingPeriodYear", period_year),
        element("ReportingPeriodStartDate", period.start),
        element("ReportingPeriodEndDate", period.end),
        element("AIFMasterFeederStatus", "NONE"),
        element("AIFBaseCurrencyDescription", ident.base_currency),
        node(
            "AIFCompleteDescription",
            _principal_info(report, config),
            _individual_info(report, config),
        ),
        _depositary_info(report, config),
        _compliance_extension(report, config),
        element("GeneratedAt", report.generated_at),
        element("ReportVersion", report.report_version),
    )


def build_report_tree(
    report: AnnexIVReport, config: Optional[SerializerConfig] = None
) -> XmlElement:
    """Build the element tree of a single-fund Annex IV report."""
    config = config or DEFAULT_CONFIG
    ident = report.aif_identification
    period_type, period_year = reporting_period_labels(ident)
    member_state = map_domicile_to_member_state(ident.domicile)

    root = _root(member_state, config, schema_location=True)
    root.add(
        node(
            "AIFMRecordInfo",
            _aifm_header(ident, period_type, period_year, config),
            node(
                "AIFMCompleteDescription",
                _aifm_identity(ident, member_state),
                _aif_record(report, member_state, period_type, period_year, config),
            ),
        ),
        element("Disclaimer", report.disclaimer),
    )
    return root


def serialize_annex_iv_to_xml(
    report: AnnexIVReport, config: Optional[SerializerConfig] = None
) -> str:
    """Serialize one fund's report to ESMA Annex IV XML.

    Args:
        report: Fully populated report
        config: Optional serializer configuration

    Returns:
        XML document text, starting with the XML declaration
    """
    config = config or DEFAULT_CONFIG
    ident = report.aif_identification

    with report_context(ident.aif_national_code, ident.domicile):
        logger.debug("annex_iv_serialization_started")
        xml = render_document(build_report_tree(report, config), config.indent)
        logger.debug(
            "annex_iv_serialization_completed",
            assets=min(
                len(report.principal_exposures.asset_breakdown), config.max_main_instruments
            ),
            counterparties=min(
                len(report.counterparty_risk.top_5_counterparties), config.max_counterparties
            ),
            size=len(xml),
        )
    return xml


def serialize_aggregate_annex_iv_to_xml(
    reports: Sequence[AnnexIVReport], config: Optional[SerializerConfig] = None
) -> str:
    """Serialize an AIFM-level aggregate covering several funds.

    The manager record is derived from the first report; every report then
    contributes one fund marker, in input order. An empty list yields ``""``.
    """
    config = config or DEFAULT_CONFIG
    if not reports:
        logger.info("aggregate_serialization_skipped", reason="no_reports")
        return ""

    first = reports[0]
    ident = first.aif_identification
    period_type, period_year = reporting_period_labels(ident)
    member_state = map_domicile_to_member_state(ident.domicile)

    description = node("AIFMCompleteDescription", _aifm_identity(ident, member_state))
    for report in reports:
        fund = report.aif_identification
        description.add(
            comment(f"Fund: {escape_xml(fund.aif_name)}"),
            element("AIFRecordInfo_FundName", fund.aif_name),
            element("AIFRecordInfo_FundCode", fund.aif_national_code),
        )

    root = _root(member_state, config, schema_location=False)
    root.add(
        node(
            "AIFMRecordInfo",
            _aifm_header(ident, period_type, period_year, config),
            description,
        ),
        element("Disclaimer", first.disclaimer),
    )

    logger.info(
        "aggregate_serialization_completed",
        aifm_lei=ident.aifm_lei,
        fund_count=len(reports),
    )
    return render_document(root, config.indent)

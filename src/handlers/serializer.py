"""Annex IV serialization Lambda handler.

Accepts a single report (``{"report": {...}}``) or a manager's fund list
(``{"reports": [...]}``), either directly in the event or as a JSON ``body``,
and returns the Annex IV XML.
"""

import json
import os
from typing import Any, Optional

from annex_iv.core import (
    AnnexIVError,
    ReportValidationError,
    SerializerConfig,
    configure_logging,
    get_logger,
)
from annex_iv.models import load_report, load_reports
from annex_iv.serialization import (
    serialize_aggregate_annex_iv_to_xml,
    serialize_annex_iv_to_xml,
)

configure_logging(level=os.environ.get("LOG_LEVEL", "INFO"), json_format=True)
logger = get_logger(__name__)

_config: Optional[SerializerConfig] = None


def get_config() -> SerializerConfig:
    """Get or create the serializer configuration."""
    global _config
    if _config is None:
        _config = SerializerConfig.from_env()
    return _config


def _payload(event: dict) -> dict:
    body = event.get("body")
    if body is None:
        return event
    if isinstance(body, (str, bytes)):
        try:
            body = json.loads(body)
        except json.JSONDecodeError as e:
            raise ReportValidationError("Request body is not valid JSON", failed_checks=[str(e)]) from e
    if not isinstance(body, dict):
        raise ReportValidationError("Request body must be a JSON object")
    return body


def _error_response(status_code: int, error: AnnexIVError) -> dict:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps({
            "error": error.error_code,
            "message": error.message,
            "details": error.details,
        }),
    }


def handler(event: dict, context: Any) -> dict:
    """Handle Annex IV serialization requests.

    Args:
        event: Request containing ``report`` or ``reports``
        context: Lambda context

    Returns:
        Response with the XML document, or an error payload
    """
    try:
        payload = _payload(event)
        config = get_config()

        if "reports" in payload:
            reports = load_reports(payload["reports"])
            logger.info("aggregate_serialization_requested", fund_count=len(reports))
            xml = serialize_aggregate_annex_iv_to_xml(reports, config)
        elif "report" in payload:
            report = load_report(payload["report"])
            logger.info(
                "serialization_requested",
                aif_national_code=report.aif_identification.aif_national_code,
            )
            xml = serialize_annex_iv_to_xml(report, config)
        else:
            raise ReportValidationError(
                "Request must contain 'report' or 'reports'",
                failed_checks=["missing report payload"],
            )

    except ReportValidationError as e:
        logger.warning("serialization_rejected", error=str(e), failed_checks=e.failed_checks)
        return _error_response(400, e)
    except AnnexIVError as e:
        logger.error("serialization_failed", error=str(e))
        return _error_response(500, e)

    return {
        "statusCode": 200,
        "headers": {"Content-Type": "application/xml; charset=utf-8"},
        "body": xml,
    }

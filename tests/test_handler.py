"""Tests for the serialization Lambda handler."""

import json

import pytest

from handlers import serializer as serializer_handler
from handlers.serializer import handler


@pytest.fixture(autouse=True)
def reset_config(monkeypatch):
    """Drop the cached config so each test reads its own environment."""
    monkeypatch.setattr(serializer_handler, "_config", None)


class TestSerializerHandler:
    """Tests for the serializer handler."""

    def test_single_report(self, sample_report_data):
        response = handler({"report": sample_report_data}, None)

        assert response["statusCode"] == 200
        assert response["headers"]["Content-Type"] == "application/xml; charset=utf-8"
        assert response["body"].startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert "<AIFNationalCode>DE-TEST-001</AIFNationalCode>" in response["body"]

    def test_aggregate_reports(self, sample_report_data, minimal_report_data):
        response = handler({"reports": [sample_report_data, minimal_report_data]}, None)

        assert response["statusCode"] == 200
        assert response["body"].count("<AIFRecordInfo_FundCode>") == 2

    def test_empty_aggregate(self):
        response = handler({"reports": []}, None)

        assert response["statusCode"] == 200
        assert response["body"] == ""

    def test_json_body(self, sample_report_data):
        event = {"body": json.dumps({"report": sample_report_data})}
        response = handler(event, None)

        assert response["statusCode"] == 200
        assert "<AIFName>Test Immobilien Fonds I</AIFName>" in response["body"]

    def test_invalid_json_body(self):
        response = handler({"body": "{not json"}, None)

        assert response["statusCode"] == 400
        body = json.loads(response["body"])
        assert body["error"] == "VALIDATION"

    def test_non_object_body(self):
        response = handler({"body": "[1, 2]"}, None)

        assert response["statusCode"] == 400

    def test_missing_payload(self):
        response = handler({}, None)

        assert response["statusCode"] == 400
        body = json.loads(response["body"])
        assert body["message"] == "Request must contain 'report' or 'reports'"

    def test_invalid_report(self, sample_report_data):
        del sample_report_data["principal_exposures"]
        response = handler({"report": sample_report_data}, None)

        assert response["statusCode"] == 400
        body = json.loads(response["body"])
        assert body["details"]["aif_national_code"] == "DE-TEST-001"
        assert any("principal_exposures" in check for check in body["details"]["failed_checks"])

    def test_non_mapping_identification_section(self):
        response = handler({"report": {"aif_identification": "x"}}, None)

        assert response["statusCode"] == 400
        body = json.loads(response["body"])
        assert body["error"] == "VALIDATION"
        assert body["details"]["aif_national_code"] is None

    def test_reports_not_a_list(self, sample_report_data):
        response = handler({"reports": sample_report_data}, None)

        assert response["statusCode"] == 400

    def test_config_from_environment(self, monkeypatch, sample_report_data):
        monkeypatch.setenv("ANNEX_IV_MAX_MAIN_INSTRUMENTS", "1")
        response = handler({"report": sample_report_data}, None)

        assert response["statusCode"] == 200
        assert response["body"].count("<MainInstrumentTraded>") == 1

    def test_invalid_configuration(self, monkeypatch, sample_report_data):
        monkeypatch.setenv("ANNEX_IV_MAX_COUNTERPARTIES", "many")
        response = handler({"report": sample_report_data}, None)

        assert response["statusCode"] == 500
        body = json.loads(response["body"])
        assert body["error"] == "CONFIGURATION"
        assert body["details"]["setting"] == "ANNEX_IV_MAX_COUNTERPARTIES"

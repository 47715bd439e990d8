"""Tests for POST /generate-prompt."""

import json
from unittest.mock import patch

from fastapi import FastAPI
from fastapi.testclient import TestClient

from deal_prompt.api.routes.prompt import router
from deal_prompt.labels import LabelTable, default_label_table


def _make_app(labels: LabelTable | None = None) -> FastAPI:
    """Build a test app with the label table on app.state."""
    app = FastAPI()
    app.include_router(router)
    app.state.labels = labels or default_label_table()
    return app


class TestGeneratePromptRoute:
    def test_valid_deal_returns_prompt(self, valid_deal):
        client = TestClient(_make_app())
        response = client.post("/generate-prompt", json=valid_deal)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["mappedValues"] == {
            "assetType": "Multifamily",
            "loanType": "Purchase",
            "loanTerm": "Bridge",
        }
        lines = body["prompt"].split("\n")
        assert len(lines) == 7
        assert lines[4] == "Loan Amount: $1,500,000"

    def test_missing_fields_returns_400(self, valid_deal):
        del valid_deal["location"]
        valid_deal["loanType"] = "  "

        client = TestClient(_make_app())
        response = client.post("/generate-prompt", json=valid_deal)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Missing required fields: location, loanType"
        assert body["missingFields"] == ["location", "loanType"]

    def test_raw_newlines_in_body_are_accepted(self, valid_deal):
        valid_deal["dealDescription"] = "Line one"
        raw = json.dumps(valid_deal).replace("Line one", "Line one\nLine two")

        client = TestClient(_make_app())
        response = client.post(
            "/generate-prompt",
            content=raw,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 200
        assert "Deal Description: Line one\nLine two" in response.json()["prompt"]

    def test_malformed_body_returns_400(self):
        client = TestClient(_make_app())
        response = client.post(
            "/generate-prompt",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid JSON"
        assert "details" in body

    def test_nested_object_field_returns_400(self, valid_deal):
        valid_deal["location"] = {"city": "Austin"}

        client = TestClient(_make_app())
        response = client.post("/generate-prompt", json=valid_deal)

        assert response.status_code == 400

    def test_non_numeric_amount_returns_500(self, valid_deal):
        valid_deal["loanAmount"] = "lots"

        client = TestClient(_make_app())
        response = client.post("/generate-prompt", json=valid_deal)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to generate prompt"
        assert "Loan amount is not numeric" in body["details"]

    @patch("deal_prompt.api.routes.prompt.format_prompt")
    def test_unexpected_failure_returns_500(self, mock_format, valid_deal):
        mock_format.side_effect = ValueError("template exploded")

        client = TestClient(_make_app())
        response = client.post("/generate-prompt", json=valid_deal)

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to generate prompt",
            "details": "template exploded",
        }

    def test_uses_label_table_from_app_state(self, valid_deal):
        labels = LabelTable({"assetType": {"0": "Apartments"}})

        client = TestClient(_make_app(labels))
        response = client.post("/generate-prompt", json=valid_deal)

        assert response.json()["mappedValues"]["assetType"] == "Apartments"

    def test_very_large_amount_is_formatted(self, valid_deal):
        valid_deal["loanAmount"] = 1e28

        client = TestClient(_make_app())
        response = client.post("/generate-prompt", json=valid_deal)

        assert response.status_code == 200
        assert "Loan Amount: $10" + ",000" * 9 in response.json()["prompt"]

    @patch("deal_prompt.api.routes.prompt.format_prompt")
    def test_arithmetic_failure_returns_json_500(self, mock_format, valid_deal):
        mock_format.side_effect = ArithmeticError("overflow")

        client = TestClient(_make_app())
        response = client.post("/generate-prompt", json=valid_deal)

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to generate prompt",
            "details": "overflow",
        }

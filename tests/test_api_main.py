"""Tests for the assembled FastAPI app (lifespan, middleware, routing)."""

import json
from unittest.mock import patch

from fastapi.testclient import TestClient

from deal_prompt.api.main import REQUEST_ID_HEADER, app


class TestAppLifespan:
    def test_default_labels_loaded_at_startup(self):
        with patch("deal_prompt.api.main.config.LABELS_PATH", ""):
            with TestClient(app) as client:
                response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["labelCategories"] == ["assetType", "loanType", "loanTerm"]

    def test_labels_path_overrides_defaults(self, tmp_path, valid_deal):
        path = tmp_path / "labels.json"
        path.write_text(json.dumps({"loanTerm": {"1": "Short-term bridge"}}))

        with patch("deal_prompt.api.main.config.LABELS_PATH", str(path)):
            with TestClient(app) as client:
                response = client.post("/generate-prompt", json=valid_deal)

        assert response.status_code == 200
        assert response.json()["mappedValues"]["loanTerm"] == "Short-term bridge"


class TestRequestIdMiddleware:
    def test_request_id_is_echoed(self):
        with TestClient(app) as client:
            response = client.get("/health", headers={REQUEST_ID_HEADER: "req-123"})

        assert response.headers[REQUEST_ID_HEADER] == "req-123"

    def test_request_id_is_generated(self):
        with TestClient(app) as client:
            response = client.post("/parse-csv-data", json={})

        assert response.status_code == 400
        assert len(response.headers[REQUEST_ID_HEADER]) == 32

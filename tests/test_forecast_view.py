from __future__ import annotations

import json

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import Client

from backend.api import views
from forecast.advisory.llm import UnavailableTextGenerator
from forecast.advisory.service import AdvisoryService
from payloads import county_location, county_payload


CWA_BASE = "https://cwa.test/api/v1/rest/datastore"


@pytest.fixture(autouse=True)
def _services(monkeypatch):
    views.get_forecast_coordinator.cache_clear()
    monkeypatch.setattr(views, "get_advisory_service", lambda: AdvisoryService(UnavailableTextGenerator()))
    yield
    views.get_forecast_coordinator.cache_clear()


def test_forecast_endpoint_returns_observation_and_advisory(requests_mock, taipei_township) -> None:
    requests_mock.get(f"{CWA_BASE}/F-D0047-061", json=taipei_township)
    client = Client()

    response = client.get("/api/forecast", {"area": "臺北市", "sub_area": "信義區"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["observation"]["full_location_name"] == "臺北市信義區"
    assert payload["observation"]["temperature_display"] == "25 - 25"
    assert payload["observation"]["observed_at"].endswith("Z")
    assert payload["advisory"]["is_model_generated"] is False
    assert "⚠️ 降雨警報" in payload["advisory"]["warning"]


def test_forecast_endpoint_county_mode(requests_mock) -> None:
    requests_mock.get(
        f"{CWA_BASE}/F-C0032-001",
        json=county_payload(county_location("臺中市", MinT="20", MaxT="27", PoP="10", Wx="晴時多雲")),
    )

    response = Client().get("/api/forecast", {"area": "臺中市", "detailed": "0"})

    assert response.status_code == 200
    assert response.json()["observation"]["temperature_display"] == "20 - 27"


def test_forecast_endpoint_requires_area() -> None:
    response = Client().get("/api/forecast")

    assert response.status_code == 400
    assert "detail" in response.json()


def test_forecast_endpoint_unsupported_area(requests_mock) -> None:
    response = Client().get("/api/forecast", {"area": "東京都"})

    assert response.status_code == 404
    assert response.json()["detail"] == "不支援此縣市的鄉鎮預報"
    assert requests_mock.call_count == 0


def test_forecast_endpoint_upstream_failure(requests_mock) -> None:
    requests_mock.get(f"{CWA_BASE}/F-D0047-061", status_code=500, text="down")

    response = Client().get("/api/forecast", {"area": "臺北市"})

    assert response.status_code == 502
    assert response.json()["detail"] == "無效的服務器響應"


def test_forecast_endpoint_malformed_county_period(requests_mock) -> None:
    location = {"locationName": "臺中市", "weatherElement": [{"elementName": "MinT", "time": [None]}]}
    requests_mock.get(f"{CWA_BASE}/F-C0032-001", json=county_payload(location))

    response = Client().get("/api/forecast", {"area": "臺中市", "detailed": "0"})

    assert response.status_code == 502
    assert response.json()["detail"] == "解碼天氣數據失敗"


def test_area_list_endpoint() -> None:
    payload = Client().get("/api/areas").json()

    assert len(payload["areas"]) == 22
    assert payload["popular"][0] == "臺北市"


def test_sub_area_endpoint(requests_mock, taipei_township) -> None:
    requests_mock.get(f"{CWA_BASE}/F-D0047-061", json=taipei_township)

    response = Client().get("/api/areas/臺北市/sub-areas")

    assert response.status_code == 200
    assert response.json() == {"area": "臺北市", "sub_areas": ["中正區", "大安區", "信義區"]}


def test_forecast_fetch_command(requests_mock, taipei_township, capsys) -> None:
    requests_mock.get(f"{CWA_BASE}/F-D0047-061", json=taipei_township)

    call_command("forecast_fetch", area="臺北市", sub_area="大安區")

    payload = json.loads(capsys.readouterr().out)
    assert payload["observation"]["sub_region_name"] == "大安區"
    assert payload["advisory"]["summary"].startswith("☀️ 今日晴")


def test_forecast_fetch_command_reports_errors() -> None:
    with pytest.raises(CommandError, match="不支援"):
        call_command("forecast_fetch", area="東京都")

"""Tests for the Flask survey service."""
import json
import logging
from unittest.mock import MagicMock

import httpx
import pytest

from csat.payloads import PayloadBuilder
from csat.relay import SurveyRelay
from csat.zendesk import ZendeskGateway
from survey.app import create_app, log_startup


@pytest.fixture
def zendesk():
    """Fake Zendesk: records requests and answers from a per-path table."""
    state = {"requests": [], "responses": {}}

    def handler(request):
        state["requests"].append(request)
        respond = state["responses"].get(request.url.path)
        if respond is None:
            return httpx.Response(200, json={})
        return respond(request)

    state["transport"] = httpx.MockTransport(handler)
    return state


@pytest.fixture
def client(config, zendesk):
    gateway = ZendeskGateway(config, transport=zendesk["transport"])
    app = create_app(relay=SurveyRelay(gateway, PayloadBuilder(config)))
    app.config["TESTING"] = True
    return app.test_client()


def paths(zendesk):
    return [request.url.path for request in zendesk["requests"]]


def test_submit_survey_success(client, zendesk, survey):
    response = client.post("/submit-survey", json=survey)

    assert response.status_code == 200
    assert response.get_json() == {
        "success": True,
        "message": "Survey submitted and tracked successfully",
    }
    assert paths(zendesk) == ["/api/v2/tickets/4821.json", "/api/v2/user_profiles/events"]

    ticket = json.loads(zendesk["requests"][0].content)["ticket"]
    assert ticket["tags"] == ["csat-5", "csat-positive"]
    assert ticket["comment"]["public"] is False

    event = json.loads(zendesk["requests"][1].content)
    assert event["profile"]["identifiers"] == [{"type": "email", "value": "a@b.com"}]
    assert event["event"]["properties"]["submitted_at"].endswith("Z")


@pytest.mark.parametrize("field", ["ticketId", "rating"])
def test_missing_field_is_bad_request(client, zendesk, survey, field):
    del survey[field]

    response = client.post("/submit-survey", json=survey)

    assert response.status_code == 400
    assert response.get_json() == {"success": False, "message": "Missing ticketId or rating"}
    assert zendesk["requests"] == []


def test_non_json_body_is_bad_request(client, zendesk):
    response = client.post("/submit-survey", data="not json", content_type="text/plain")

    assert response.status_code == 400
    assert zendesk["requests"] == []


def test_ticket_rejection_reports_zendesk_status(client, zendesk, survey):
    zendesk["responses"]["/api/v2/tickets/4821.json"] = lambda request: httpx.Response(
        404, json={"error": "RecordNotFound"}
    )

    response = client.post("/submit-survey", json=survey)

    assert response.status_code == 500
    assert response.get_json() == {
        "success": False,
        "message": "Failed to submit survey",
        "error": "Request failed with status code 404",
        "zendeskStatus": 404,
    }
    assert paths(zendesk) == ["/api/v2/tickets/4821.json"]


def test_unreachable_zendesk_reports_unknown_status(client, zendesk, survey):
    def refuse(request):
        raise httpx.ConnectError("Name or service not known", request=request)

    zendesk["responses"]["/api/v2/tickets/4821.json"] = refuse

    response = client.post("/submit-survey", json=survey)

    assert response.status_code == 500
    assert response.get_json()["zendeskStatus"] == "unknown"
    assert paths(zendesk) == ["/api/v2/tickets/4821.json"]


def test_event_failure_after_ticket_update(client, zendesk, survey):
    zendesk["responses"]["/api/v2/user_profiles/events"] = lambda request: httpx.Response(
        400, json={"error": "InvalidEvent"}
    )

    response = client.post("/submit-survey", json=survey)

    assert response.status_code == 500
    assert response.get_json()["zendeskStatus"] == 400
    # The ticket update was sent once and is not undone
    assert paths(zendesk) == ["/api/v2/tickets/4821.json", "/api/v2/user_profiles/events"]


def test_unexpected_error_is_server_error(config):
    relay = MagicMock()
    relay.submit.side_effect = RuntimeError("boom")
    app = create_app(relay=relay)

    response = app.test_client().post("/submit-survey", json={"ticketId": "1", "rating": "5"})

    assert response.status_code == 500
    assert response.get_json() == {
        "success": False,
        "message": "Failed to submit survey",
        "error": "boom",
        "zendeskStatus": "unknown",
    }


def test_preflight(client, zendesk):
    response = client.options("/submit-survey")

    assert response.status_code == 204
    assert response.data == b""
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert response.headers["Access-Control-Allow-Methods"] == "POST, OPTIONS"
    assert response.headers["Access-Control-Allow-Headers"] == "Content-Type"
    assert response.headers["Access-Control-Max-Age"] == "86400"
    assert zendesk["requests"] == []


def test_cors_headers_on_post(client, survey):
    response = client.post("/submit-survey", json=survey)

    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.get_json()["status"] == "healthy"


def test_startup_logs_missing_token(config, caplog):
    from dataclasses import replace

    with caplog.at_level(logging.INFO, logger="survey.app"):
        log_startup(replace(config, api_token=None))

    assert "ZENDESK_TOKEN environment variable is not set" in caplog.text
    assert "Using Zendesk subdomain: acme-test" in caplog.text


def test_startup_logs_token_length(config, caplog):
    with caplog.at_level(logging.INFO, logger="survey.app"):
        log_startup(config)

    assert "ZENDESK_TOKEN loaded (length: 12 characters)" in caplog.text


def test_crafted_ticket_id_stays_on_ticket_endpoint(client, zendesk, survey):
    survey["ticketId"] = "../users/99"

    client.post("/submit-survey", json=survey)

    assert zendesk["requests"][0].url.raw_path == b"/api/v2/tickets/..%2Fusers%2F99.json"


def test_nan_ticket_id_is_bad_request(client, zendesk):
    response = client.post(
        "/submit-survey", data='{"ticketId": NaN, "rating": "5"}', content_type="application/json"
    )

    assert response.status_code == 400
    assert zendesk["requests"] == []

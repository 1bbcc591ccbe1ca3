from fastapi.testclient import TestClient

from leadbot import main
from leadbot.main import app
from leadbot.planner.fallback import SLOT_QUESTIONS
from leadbot.planner.quick_rules import SERVICES_REPLY

client = TestClient(app)


def test_verification_handshake(monkeypatch):
    monkeypatch.setattr(main.settings, "meta_verify_token", "s3cret")

    response = client.get(
        "/webhook",
        params={"hub.mode": "subscribe", "hub.verify_token": "s3cret", "hub.challenge": "1158201444"},
    )

    assert response.status_code == 200
    assert response.text == "1158201444"


def test_verification_rejects_wrong_token(monkeypatch):
    monkeypatch.setattr(main.settings, "meta_verify_token", "s3cret")

    response = client.get(
        "/webhook",
        params={"hub.mode": "subscribe", "hub.verify_token": "nope", "hub.challenge": "1"},
    )

    assert response.status_code == 403
    assert response.text == "Forbidden"


def test_inbound_message_gets_generated_reply(make_message_payload, sent_messages, generated_reply):
    payload = make_message_payload("I need a logo for my bakery, budget around 500 USD")
    sender = payload["entry"][0]["changes"][0]["value"]["messages"][0]["from"]

    response = client.post("/webhook", json=payload)

    assert response.status_code == 200
    assert response.text == "OK"
    assert sent_messages == [(sender, "Lovely. When do you need it ready?")]
    assert generated_reply[0].slots["service"] == "logo"

    lead = client.get(f"/leads/{sender}").json()
    assert lead["slots"]["service"] == "logo"
    assert lead["missing_slots"][0] == "timeline"
    assert [turn["role"] for turn in lead["turns"]] == ["user", "assistant"]


def test_retransmitted_event_is_sent_once(make_message_payload, sent_messages, generated_reply):
    payload = make_message_payload("Hello, we need a website", event_id="wamid.ABC-retry")

    first = client.post("/webhook", json=payload)
    second = client.post("/webhook", json=payload)

    assert first.status_code == 200
    assert second.status_code == 200
    assert len(sent_messages) == 1
    assert len(generated_reply) == 1


def test_unconfigured_generation_falls_back(make_message_payload, sent_messages):
    payload = make_message_payload("We need a website")

    response = client.post("/webhook", json=payload)

    assert response.status_code == 200
    assert sent_messages[0][1] == SLOT_QUESTIONS["timeline"]


def test_services_question_is_answered_immediately(make_message_payload, sent_messages, generated_reply):
    response = client.post("/webhook", json=make_message_payload("What do you offer?"))

    assert response.status_code == 200
    assert sent_messages[0][1] == SERVICES_REPLY
    assert generated_reply == []


def test_metrics_count_webhook_turns(make_message_payload, sent_messages):
    before = client.get("/metrics").json()["total_events"]

    client.post("/webhook", json=make_message_payload("We need a menu"))

    after = client.get("/metrics").json()
    assert after["total_events"] == before + 1
    assert after["outcomes"]["replied"] >= 1

import random

import pytest

import app as app_module
from conversation_engine import create_conversation
from faq_knowledge import FALLBACK_RESPONSES, NAME_PROMPT, QUERY_PROMPT, WIDGET_GREETING
from session_store import ConversationStore
from task_scheduler import TaskScheduler


@pytest.fixture
def client(monkeypatch, clock):
    def factory(variant):
        return create_conversation(variant, scheduler=TaskScheduler(clock), rng=random.Random(5))

    monkeypatch.setattr(
        app_module, "store", ConversationStore(clock=clock, factory=factory)
    )
    app_module.app.config["TESTING"] = True
    with app_module.app.test_client() as c:
        yield c


def _texts(state):
    return [m["text"] for m in state["messages"]]


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok", "service": "faq-assistant"}


def test_quick_actions(client):
    data = client.get("/api/chat/quick-actions").get_json()
    assert data["quick_actions"][0] == {"label": "How to apply?", "query": "how to apply"}
    assert len(data["quick_actions"]) == 4


def test_faq_match_hit(client):
    data = client.post("/api/faq/match", json={"message": "thanks a lot"}).get_json()
    assert data["matched"] is True
    assert data["category"] == "gratitude"


def test_faq_match_miss(client):
    data = client.post("/api/faq/match", json={"message": "asdkjhasd"}).get_json()
    assert data["matched"] is False
    assert data["category"] is None
    assert data["response"] in FALLBACK_RESPONSES


@pytest.mark.parametrize("kwargs", [
    {"json": {}},
    {"json": {"message": 3}},
    {"json": ["message"]},
    {"data": "not json"},
])
def test_faq_match_bad_body(client, kwargs):
    resp = client.post("/api/faq/match", **kwargs)
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_unknown_variant_is_404(client):
    resp = client.post("/api/chat/sidebar/open")
    assert resp.status_code == 404
    assert "error" in resp.get_json()
    assert client.delete("/api/chat/sidebar").status_code == 404


def test_unknown_route_is_json_404(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert "error" in resp.get_json()


def test_widget_round_trip(client, clock):
    state = client.post("/api/chat/widget/open").get_json()
    assert state["is_open"] is True
    assert _texts(state) == [WIDGET_GREETING]
    assert state["next_reply_in"] is None

    resp = client.post("/api/chat/widget/messages", json={"message": "hello"})
    assert resp.status_code == 202
    state = resp.get_json()
    assert state["is_typing"] is True
    assert _texts(state)[-1] == "hello"
    assert 0.8 <= state["next_reply_in"] <= 1.2

    clock.advance(1.2)
    state = client.get("/api/chat/widget").get_json()
    assert state["is_typing"] is False
    assert len(state["messages"]) == 3
    assert state["messages"][-1]["sender"] == "bot"


def test_blank_message_is_ignored(client):
    client.post("/api/chat/widget/open")
    state = client.post("/api/chat/widget/messages", json={"message": "   "}).get_json()
    assert _texts(state) == [WIDGET_GREETING]
    assert state["is_typing"] is False


def test_quick_action_endpoint(client, clock):
    resp = client.post("/api/chat/widget/quick-action", json={"query": "skill tests"})
    assert resp.status_code == 202
    assert _texts(resp.get_json()) == ["skill tests"]
    clock.advance(1.2)
    state = client.get("/api/chat/widget").get_json()
    assert state["messages"][-1]["text"].startswith("Skill tests help validate")


def test_toggle_and_close(client):
    assert client.post("/api/chat/widget/toggle").get_json()["is_open"] is True
    assert client.post("/api/chat/widget/close").get_json()["is_open"] is False


def test_landing_flow(client, clock):
    client.post("/api/chat/landing/open")
    clock.advance(0.5)
    state = client.get("/api/chat/landing").get_json()
    assert _texts(state) == [NAME_PROMPT]
    assert state["step"] == "awaiting_name"

    client.post("/api/chat/landing/messages", json={"message": "Ada"})
    for seconds in (1.2, 1.5, 2.0):
        clock.advance(seconds)
        state = client.get("/api/chat/landing").get_json()
    assert state["step"] == "awaiting_query"
    assert state["user_name"] == "Ada"
    assert _texts(state)[-1] == QUERY_PROMPT

    client.post("/api/chat/landing/messages", json={"message": "how do I apply"})
    clock.advance(1.2)
    state = client.get("/api/chat/landing").get_json()
    assert "Browse available projects" in _texts(state)[-1]


def test_delete_starts_fresh(client):
    client.post("/api/chat/widget/open")
    assert client.delete("/api/chat/widget").get_json() == {"removed": True}
    state = client.get("/api/chat/widget").get_json()
    assert state["messages"] == []
    assert state["is_open"] is False


def test_browsers_do_not_share_conversations(client):
    client.post("/api/chat/widget/messages", json={"message": "hello"})
    with app_module.app.test_client() as other:
        assert other.get("/api/chat/widget").get_json()["messages"] == []


def test_faq_match_classifies_once(client, monkeypatch):
    import chatbot_engine

    calls = []
    real_find_entry = chatbot_engine.find_entry

    def counting(*args, **kwargs):
        calls.append(args)
        return real_find_entry(*args, **kwargs)

    monkeypatch.setattr(chatbot_engine, "find_entry", counting)
    data = client.post("/api/faq/match", json={"message": "how to apply"}).get_json()
    assert data["category"] == "application"
    assert len(calls) == 1

"""
app.py
------
Flask entry point for the ProjectHub FAQ assistant.

Routes
------
GET    /health                          → Simple health-check endpoint
GET    /api/chat/quick-actions          → Canned widget phrases
POST   /api/faq/match                   → Stateless one-shot FAQ answer
GET    /api/chat/<variant>              → Deliver due replies, return chat state
POST   /api/chat/<variant>/open         → Show the chat (seeds the greeting)
POST   /api/chat/<variant>/close        → Hide the chat
POST   /api/chat/<variant>/toggle       → Flip visibility
POST   /api/chat/<variant>/messages     → Submit a user message
POST   /api/chat/<variant>/quick-action → Submit a canned phrase
DELETE /api/chat/<variant>              → Forget the conversation

<variant> is "widget" (sidebar FAQ) or "landing" (landing-page assistant).
Bot replies arrive after a short typing delay; clients poll
GET /api/chat/<variant> and may use ``next_reply_in`` to time the poll.
"""

import os
import logging
from functools import wraps
from uuid import uuid4

from flask import Flask, request, jsonify, session
from werkzeug.exceptions import BadRequest, NotFound

from chatbot_engine      import answer
from conversation_engine import VARIANTS
from faq_knowledge       import QUICK_ACTIONS
from session_store       import ConversationStore

# --------------------------------------------------------------------------- #
#  App configuration                                                           #
# --------------------------------------------------------------------------- #

logging.basicConfig(
    level  = logging.INFO,
    format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = os.environ.get("FLASK_SECRET", "dev-secret-change-in-prod")
app.json.ensure_ascii = False

# Conversation lifetime settings
CHAT_SESSION_IDLE_SECONDS = float(os.environ.get("CHAT_SESSION_IDLE_SECONDS", 1800))
CHAT_MAX_SESSIONS         = int(os.environ.get("CHAT_MAX_SESSIONS", 1000))

store = ConversationStore(
    idle_seconds = CHAT_SESSION_IDLE_SECONDS,
    max_sessions = CHAT_MAX_SESSIONS,
)


# --------------------------------------------------------------------------- #
#  Helpers                                                                     #
# --------------------------------------------------------------------------- #

def _chat_id() -> str:
    """Return this browser's chat id, minting one on first use."""
    chat_id = session.get("chat_id")
    if not chat_id:
        chat_id = uuid4().hex
        session["chat_id"] = chat_id
    return chat_id


def _json_field(name: str) -> str:
    """Read a required string field from the JSON body."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise BadRequest("Request body must be a JSON object.")
    value = body.get(name)
    if not isinstance(value, str):
        raise BadRequest(f"Field '{name}' must be a string.")
    return value


def _render(conversation) -> dict:
    """Snapshot plus the seconds until the next scheduled reply (or None)."""
    state   = conversation.snapshot()
    due     = conversation.scheduler.next_due()
    state["next_reply_in"] = (
        round(max(0.0, due - conversation.scheduler.now()), 3) if due is not None else None
    )
    return state


def chat_route(f):
    """
    Resolve <variant> into the caller's Conversation and pass it on.
    Unknown variants are answered with 404.

    Usage::
        @app.route("/api/chat/<variant>/open", methods=["POST"])
        @chat_route
        def chat_open(conversation): ...
    """
    @wraps(f)
    def wrapped(variant: str, *args, **kwargs):
        if variant not in VARIANTS:
            raise NotFound(f"Unknown chat variant '{variant}'.")
        with store.checkout(_chat_id(), variant) as conversation:
            return f(conversation, *args, **kwargs)
    return wrapped


# --------------------------------------------------------------------------- #
#  Routes – Chat                                                               #
# --------------------------------------------------------------------------- #

@app.route("/api/chat/quick-actions", methods=["GET"])
def quick_actions():
    """Return the widget quick-action buttons."""
    return jsonify({
        "quick_actions": [{"label": label, "query": query} for label, query in QUICK_ACTIONS],
    })


@app.route("/api/chat/<variant>", methods=["GET"])
@chat_route
def chat_state(conversation):
    """Deliver due replies and return the full chat state."""
    return jsonify(_render(conversation))


@app.route("/api/chat/<variant>/open", methods=["POST"])
@chat_route
def chat_open(conversation):
    conversation.open()
    return jsonify(_render(conversation))


@app.route("/api/chat/<variant>/close", methods=["POST"])
@chat_route
def chat_close(conversation):
    conversation.close()
    return jsonify(_render(conversation))


@app.route("/api/chat/<variant>/toggle", methods=["POST"])
@chat_route
def chat_toggle(conversation):
    conversation.toggle()
    return jsonify(_render(conversation))


@app.route("/api/chat/<variant>/messages", methods=["POST"])
@chat_route
def chat_submit(conversation):
    """
    Submit the user's message.

    JSON body:
        message – string; blank text is accepted and ignored
    """
    conversation.submit(_json_field("message"))
    return jsonify(_render(conversation)), 202


@app.route("/api/chat/<variant>/quick-action", methods=["POST"])
@chat_route
def chat_quick_action(conversation):
    """
    Submit a canned phrase.

    JSON body:
        query – string, usually one of /api/chat/quick-actions
    """
    conversation.quick_action(_json_field("query"))
    return jsonify(_render(conversation)), 202


@app.route("/api/chat/<variant>", methods=["DELETE"])
def chat_end(variant: str):
    """Forget the conversation; the next request starts a fresh one."""
    if variant not in VARIANTS:
        raise NotFound(f"Unknown chat variant '{variant}'.")
    removed = store.discard(_chat_id(), variant)
    return jsonify({"removed": removed})


# --------------------------------------------------------------------------- #
#  Routes – JSON API                                                           #
# --------------------------------------------------------------------------- #

@app.route("/api/faq/match", methods=["POST"])
def api_faq_match():
    """
    Stateless FAQ lookup.

    JSON body:
        message – string
    """
    message = _json_field("message")
    reply, result = answer(message)
    return jsonify({
        "response": reply,
        "category": result.entry.category if result else None,
        "matched":  result is not None,
    })


@app.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok", "service": "faq-assistant"})


# --------------------------------------------------------------------------- #
#  Error handlers                                                              #
# --------------------------------------------------------------------------- #

@app.errorhandler(400)
def bad_request(e):
    return jsonify({"error": e.description}), 400


@app.errorhandler(404)
def not_found(e):
    return jsonify({"error": e.description}), 404


@app.errorhandler(405)
def method_not_allowed(e):
    return jsonify({"error": "Method not allowed."}), 405


@app.errorhandler(500)
def server_error(e):
    logger.error("Unhandled error: %s", e)
    return jsonify({"error": "Internal server error."}), 500


# --------------------------------------------------------------------------- #
#  Entry point                                                                 #
# --------------------------------------------------------------------------- #

if __name__ == "__main__":
    port  = int(os.environ.get("PORT", 5000))
    debug = os.environ.get("FLASK_DEBUG", "false").lower() == "true"
    app.run(host="0.0.0.0", port=port, debug=debug)

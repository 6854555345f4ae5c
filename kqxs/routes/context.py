"""Chat assistant context (read-only)."""

from __future__ import annotations

from flask import Blueprint

from kqxs.extensions import get_context_service
from kqxs.utils.responses import ok

context_bp = Blueprint("context", __name__)


@context_bp.get("/context")
def chat_context():
    return ok(get_context_service().build_chat_context())

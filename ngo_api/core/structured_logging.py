"""Structured logging helpers (credential-safe)."""

import logging
from typing import Any

from ngo_api.core.config import settings


def configure_logging() -> None:
    """Set the root log level and a single stream handler."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def build_log_context(
    *,
    user_id: str | None = None,
    request_id: str | None = None,
    route: str | None = None,
    method: str | None = None,
    form_template_id: str | None = None,
    submission_id: str | None = None,
) -> dict[str, Any]:
    """Return a log context dict. Never pass passwords or answer payloads."""
    context: dict[str, Any] = {}
    if user_id:
        context["user_id"] = user_id
    if request_id:
        context["request_id"] = request_id
    if route:
        context["route"] = route
    if method:
        context["method"] = method
    if form_template_id:
        context["form_template_id"] = form_template_id
    if submission_id:
        context["submission_id"] = submission_id
    return context

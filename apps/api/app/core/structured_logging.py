"""Structured logging helpers (PII-safe)."""

import logging
from typing import Any

from app.core.config import settings


def configure_logging() -> None:
    """Configure root logging once; later calls are no-ops."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_log_context(
    *,
    user_id: int | None = None,
    form_id: int | None = None,
    response_id: int | None = None,
    request_id: str | None = None,
    route: str | None = None,
    method: str | None = None,
) -> dict[str, Any]:
    """Return a PII-safe log context dict (ids only, never emails or answers)."""
    context: dict[str, Any] = {}
    if user_id:
        context["user_id"] = user_id
    if form_id:
        context["form_id"] = form_id
    if response_id:
        context["response_id"] = response_id
    if request_id:
        context["request_id"] = request_id
    if route:
        context["route"] = route
    if method:
        context["method"] = method
    return context

"""Liveness endpoint reporting database reachability and the token sweeper."""

from __future__ import annotations

import logging

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from chatapp.api.deps import json_response, timing
from chatapp.core.extensions import SWEEPER_KEY, db

bp = Blueprint("health", __name__)
log = logging.getLogger(__name__)


def _database_status() -> str:
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        log.exception("Database ping failed", extra={"event": "health.db_error"})
        return "fail"
    return "ok"


def _sweeper_status() -> str:
    sweeper = current_app.extensions.get(SWEEPER_KEY)
    if sweeper is None:
        return "disabled"
    return "running" if sweeper.running else "stopped"


@bp.get("/health")
@timing
def healthcheck():
    cfg = current_app.config
    return json_response(
        {
            "status": "ok",
            "db": _database_status(),
            "token_sweeper": _sweeper_status(),
            "version": cfg.get("APP_VERSION", "dev"),
            "commit": cfg.get("APP_COMMIT", "unknown"),
        }
    )

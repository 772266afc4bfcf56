"""Mounts each API version's blueprints under ``API_BASE_PREFIX``."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from flask import Blueprint, Flask

log = logging.getLogger(__name__)


def _join_prefix(*segments: str) -> str:
    parts = [s.strip("/") for s in segments if s.strip("/")]
    return "/" + "/".join(parts)


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Register ``(blueprint, relative_prefix)`` pairs below ``base_prefix``.

    An empty relative prefix mounts the blueprint at ``base_prefix`` itself.
    """
    for bp, rel_prefix in entries:
        url_prefix = _join_prefix(base_prefix, rel_prefix)
        app.register_blueprint(bp, url_prefix=url_prefix)
        log.debug("Mounted blueprint %s at %s", bp.name, url_prefix)


def init_app(app: Flask) -> None:
    from chatapp.api.v1 import API_VERSION, REGISTRY

    base = _join_prefix(app.config.get("API_BASE_PREFIX", "/api"), API_VERSION)
    register_blueprint_group(app, base_prefix=base, entries=REGISTRY)


__all__ = ["init_app", "register_blueprint_group"]

"""
api.auth - Current-actor lookup for API requests.

Authentication itself happens elsewhere; this module only asks an
actor provider who is calling.  The provider is a callable taking the
request and returning an Actor (or None); apps swap it in through
app.config["ACTOR_PROVIDER"].
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Optional

from flask import abort, current_app, g, request


@dataclass(frozen=True)
class Actor:
    company_id: str
    role: str = ""

    def is_admin(self) -> bool:
        return self.role == "admin"


def header_actor(req) -> Optional[Actor]:
    """Default provider: X-Company-Id / X-Actor-Role headers."""
    company_id = (req.headers.get("X-Company-Id") or "").strip()
    if not company_id:
        return None
    return Actor(company_id=company_id,
                 role=(req.headers.get("X-Actor-Role") or "").strip().lower())


def current_actor() -> Optional[Actor]:
    provider = current_app.config.get("ACTOR_PROVIDER") or header_actor
    return provider(request)


def admin_required(view):
    """Reject non-admin callers; the actor is left on flask.g.actor."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        actor = current_actor()
        if actor is None:
            abort(401)
        if not actor.is_admin():
            abort(403)
        g.actor = actor
        return view(*args, **kwargs)
    return wrapper

"""Pydantic models for the HTTP surface.

WHY: The Events API endpoint receives a JSON envelope whose shape depends
on its "type". Validating it with pydantic turns a malformed body into a
single ValidationError the route can map to a 500.

RULES:
- Unknown envelope fields are ignored (Slack adds fields over time)
- event is kept as a plain dict; the relay parses the parts it needs
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

URL_VERIFICATION = "url_verification"
EVENT_CALLBACK = "event_callback"
REACTION_ADDED = "reaction_added"


class SlackEnvelope(BaseModel):
    """Outer JSON body of every Slack Events API request."""

    model_config = ConfigDict(extra="ignore")

    type: str = Field(description="Envelope type, e.g. 'url_verification' or 'event_callback'.")
    challenge: Optional[str] = Field(
        default=None,
        description="Handshake token, only present for url_verification.",
    )
    event: Optional[Dict[str, Any]] = Field(
        default=None,
        description="The inner event, only present for event_callback.",
    )
    event_id: Optional[str] = Field(default=None, description="Unique event ID.")

    @property
    def event_type(self) -> Optional[str]:
        if self.event is None:
            return None
        return self.event.get("type")


class HealthResponse(BaseModel):
    """Response for GET /health."""

    status: str = Field(description="Service status. Always 'ok' when reachable.")
    version: str = Field(description="Package version.")

"""Typed views of the Slack objects the relay consumes.

WHY: Slack delivers events and messages as loosely shaped dicts. Parsing
them once into small frozen dataclasses keeps the relay free of nested
.get() chains and makes missing fields fail loudly at the edge.

HOW: Each dataclass has a from_dict() factory that extracts the fields the
relay needs from the raw API/event payload.

RULES:
- ReactionEvent.from_dict raises ValueError when a required field is missing
- SourceMessage.text defaults to "" when the message has no text
- SourceMessage.thread_root falls back to the message's own ts
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ReactionEvent:
    """A "reaction_added" event: who reacted with what, on which message."""

    reaction: str
    channel_id: str
    message_ts: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReactionEvent:
        """Parse the ``event`` object of a reaction_added callback.

        Only reactions on messages carry ``item.channel`` and ``item.ts``;
        reactions on files are rejected here.
        """
        item = data.get("item") or {}
        reaction = data.get("reaction")
        channel_id = item.get("channel")
        message_ts = item.get("ts")
        if not reaction or not channel_id or not message_ts:
            raise ValueError(
                "reaction_added event is missing reaction, item.channel or item.ts"
            )
        return cls(reaction=reaction, channel_id=channel_id, message_ts=message_ts)


@dataclass(frozen=True)
class SourceMessage:
    """The message a reaction was added to."""

    ts: str
    text: str = ""
    thread_ts: Optional[str] = None

    @property
    def thread_root(self) -> str:
        """Thread to reply in: the parent thread, or this message itself."""
        return self.thread_ts or self.ts

    @classmethod
    def from_dict(cls, data: dict[str, Any], ts: str = "") -> SourceMessage:
        """Parse a message object; *ts* is used when the object has none."""
        return cls(
            ts=data.get("ts") or ts,
            text=data.get("text") or "",
            thread_ts=data.get("thread_ts"),
        )

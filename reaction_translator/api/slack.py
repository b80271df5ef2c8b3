"""Slack Web API calls used by the relay.

WHY: The relay needs exactly three things from Slack: read the message a
reaction was added to, read the replies already in its thread, and post a
reply. Wrapping them keeps slack_sdk details (method names, pagination,
response shapes) out of the orchestration logic.

HOW: A thin wrapper around slack_sdk.WebClient, authenticated with the bot
token. WebClient raises SlackApiError whenever Slack answers "ok": false;
the wrapper lets it propagate so the relay can log and abort.

RULES:
- fetch_message returns None when Slack returns no messages
- fetch_reply_texts follows response_metadata.next_cursor to the end
- No retries: every call is a single best-effort attempt
"""

from __future__ import annotations

import logging
from typing import List, Optional

from slack_sdk import WebClient

from reaction_translator.api.models import SourceMessage
from reaction_translator.config import HTTP_TIMEOUT_S, SLACK_API_URL

logger = logging.getLogger(__name__)


class SlackClient:
    """Bot-token client for conversations.replies and chat.postMessage."""

    def __init__(
        self,
        token: Optional[str] = None,
        client: Optional[WebClient] = None,
    ) -> None:
        if client is None:
            client = WebClient(
                token=token,
                base_url=SLACK_API_URL,
                timeout=int(HTTP_TIMEOUT_S),
            )
        self._client = client

    def fetch_message(self, channel_id: str, ts: str) -> Optional[SourceMessage]:
        """Fetch the single message identified by *ts* in *channel_id*.

        conversations.replies with inclusive=True and limit=1 returns the
        message itself, whether it is a top-level message or a thread reply.
        """
        resp = self._client.conversations_replies(
            channel=channel_id,
            ts=ts,
            limit=1,
            inclusive=True,
        )
        messages = resp.get("messages") or []
        if not messages:
            return None
        return SourceMessage.from_dict(messages[0], ts=ts)

    def fetch_reply_texts(self, channel_id: str, thread_ts: str) -> List[str]:
        """Return the text of every message currently in the thread."""
        texts = []  # type: List[str]
        cursor = None  # type: Optional[str]
        while True:
            kwargs = {"channel": channel_id, "ts": thread_ts}
            if cursor:
                kwargs["cursor"] = cursor
            resp = self._client.conversations_replies(**kwargs)
            for message in resp.get("messages") or []:
                texts.append(message.get("text") or "")
            cursor = (resp.get("response_metadata") or {}).get("next_cursor")
            if not cursor:
                return texts

    def post_reply(self, channel_id: str, thread_ts: str, text: str) -> str:
        """Post *text* into the thread and return the new message's ts."""
        resp = self._client.chat_postMessage(
            channel=channel_id,
            text=text,
            thread_ts=thread_ts,
        )
        return resp.get("ts") or ""

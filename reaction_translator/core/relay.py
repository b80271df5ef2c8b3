"""Reaction event orchestration: from flag emoji to translated thread reply.

WHY: A reaction_added event only says "someone reacted with X to message
Y". Turning that into a translated reply takes several dependent steps,
each of which can legitimately find nothing to do or hit a collaborator
failure. Keeping them in one place makes the abort rules explicit.

HOW: ReactionRelay runs the pipeline
  lookup language → fetch message → protect markup → translate →
  restore markup → check existing replies → post reply
and reports how far it got as a RelayOutcome. It runs as a fire-and-forget
background task, so every exception is caught, logged and turned into
RelayOutcome.FAILED at the task boundary.

RULES:
- Never post if any reply in the thread already has the exact same text
- Reply in the message's thread, or start one on the message itself
- Lookup misses (no language, no message, no translation) are logged at
  INFO, not treated as errors
- No retries, no locks: the duplicate check is best effort
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Dict, Mapping, Optional

from reaction_translator.api.deepl import DeepLClient
from reaction_translator.api.models import ReactionEvent
from reaction_translator.api.slack import SlackClient
from reaction_translator.config import Settings
from reaction_translator.core.markup import PROTECTED_TAGS, protect_markup, restore_markup
from reaction_translator.core.reactions import lookup_language

logger = logging.getLogger(__name__)

TAG_HANDLING = "xml"


class RelayOutcome(str, enum.Enum):
    """How processing of a single reaction event ended.

    RULES:
    - posted: a translated reply was posted
    - duplicate: an identical reply already existed, nothing posted
    - no_language / no_message / no_translation: nothing to do
    - failed: a collaborator call or the event payload failed
    """

    POSTED = "posted"
    DUPLICATE = "duplicate"
    NO_LANGUAGE = "no_language"
    NO_MESSAGE = "no_message"
    NO_TRANSLATION = "no_translation"
    FAILED = "failed"


class ReactionRelay:
    """Translate reacted-to messages and post the result in-thread."""

    def __init__(
        self,
        slack: SlackClient,
        translator: DeepLClient,
        reaction_table: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._slack = slack
        self._translator = translator
        self._reaction_table = reaction_table

    @classmethod
    def from_settings(cls, settings: Settings) -> ReactionRelay:
        """Build a relay with real Slack and DeepL clients."""
        return cls(
            slack=SlackClient(token=settings.slack_bot_token),
            translator=DeepLClient(auth_key=settings.deepl_auth_key),
        )

    def close(self) -> None:
        self._translator.close()

    def handle_reaction_added(self, event: Dict[str, Any]) -> RelayOutcome:
        """Process one reaction_added event; never raises."""
        try:
            return self._process(ReactionEvent.from_dict(event))
        except Exception:
            logger.exception("Error handling reaction event %s", event.get("event_ts", ""))
            return RelayOutcome.FAILED

    def _process(self, reaction: ReactionEvent) -> RelayOutcome:
        logger.info(
            "Reaction added: %s in channel %s", reaction.reaction, reaction.channel_id
        )

        language = lookup_language(reaction.reaction, self._reaction_table)
        if not language:
            logger.info("No language mapping found for reaction: %s", reaction.reaction)
            return RelayOutcome.NO_LANGUAGE

        message = self._slack.fetch_message(reaction.channel_id, reaction.message_ts)
        if message is None:
            logger.info(
                "No message found at %s in channel %s",
                reaction.message_ts,
                reaction.channel_id,
            )
            return RelayOutcome.NO_MESSAGE

        translated = self._translator.translate(
            protect_markup(message.text),
            target_lang=language.upper(),
            tag_handling=TAG_HANDLING,
            ignore_tags=PROTECTED_TAGS,
        )
        if not translated:
            logger.error("No translation result for message %s", message.ts)
            return RelayOutcome.NO_TRANSLATION

        reply_text = restore_markup(translated)
        thread_ts = message.thread_root

        existing = self._slack.fetch_reply_texts(reaction.channel_id, thread_ts)
        if reply_text in existing:
            logger.info("Translation already posted in thread %s, skipping", thread_ts)
            return RelayOutcome.DUPLICATE

        self._slack.post_reply(reaction.channel_id, thread_ts, reply_text)
        logger.info("Translation posted successfully for language: %s", language)
        return RelayOutcome.POSTED

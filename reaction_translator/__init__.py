"""Reaction Translator: translate Slack messages by reacting with a flag.

WHY: Teams that work across languages want a one-click translation of a
Slack message without leaving the conversation. Reacting with :flag-jp:
(or :jp:) to a message posts its Japanese translation in the thread.

HOW: A FastAPI webhook receives Slack Events API callbacks, verifies their
signature and hands reaction_added events to a background relay. The relay
shields Slack markup from DeepL, translates, restores the markup and
replies in-thread unless the same translation is already there.

RULES:
- Slack signature verification happens before any parsing
- Events are acknowledged before translation starts
- Duplicate replies are avoided by re-reading the thread, not by local state
"""

__version__ = "0.1.0"

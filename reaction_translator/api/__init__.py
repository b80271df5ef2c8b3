"""Outbound API clients for Slack (slack_sdk) and DeepL (httpx).

RULES:
- All Slack Web API calls go through SlackClient
- All DeepL calls go through DeepLClient
- Neither client retries; callers decide what a failure means
"""

from reaction_translator.api.deepl import DeepLAPIError, DeepLClient
from reaction_translator.api.models import ReactionEvent, SourceMessage
from reaction_translator.api.slack import SlackClient

__all__ = ["DeepLAPIError", "DeepLClient", "ReactionEvent", "SlackClient", "SourceMessage"]

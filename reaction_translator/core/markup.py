"""Protect Slack inline markup from DeepL and restore it afterwards.

WHY: Slack message text carries inline syntax that a translation engine
would happily mangle: user and channel mentions (<@U123>, <#C123>), links
with labels (<https://x.com|label>), special mentions (<!here>), date
tokens (<!date^...>) and emoji shortcodes (:smile:). DeepL's XML tag
handling leaves the content of designated tags alone, so each token is
rewritten into a tag DeepL will skip, and rewritten back once translated.

HOW: protect_markup() classifies every <payload> token into a Span variant
(see classify_token) and renders it as a tagged span, then wraps emoji
shortcodes in <emoji> tags. restore_markup() applies the inverse rules in
a fixed order: anchors first (as whole units), then emoji, mrkdwn and
ignore spans.

RULES:
- PROTECTED_TAGS are passed to DeepL as ignore_tags
- Subteam mentions are stripped, not preserved
- Special mentions become plain "@name" text after restoring
- Links keep their URL as an attribute and translate the label
- restore_markup(protect_markup(s)) == s for text without Slack tokens
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

TAG_EMOJI = "emoji"
TAG_MRKDWN = "mrkdwn"
TAG_IGNORE = "ignore"

PROTECTED_TAGS = (TAG_EMOJI, TAG_MRKDWN, TAG_IGNORE)
"""Tags DeepL must neither translate nor reorder."""

SUBTEAM_PLACEHOLDER = "@[subteam mention removed]"
SPECIAL_MENTION_FALLBACK = "@[special mention]"

_TOKEN_RE = re.compile(r"<(.*?)>")
_EMOJI_RE = re.compile(r":([a-z0-9_-]+):")

_MENTION_RE = re.compile(r"^[#@].*$")
_SUBTEAM_RE = re.compile(r"^!subteam.*$")
_DATE_RE = re.compile(r"^!date.*$")
_SPECIAL_RE = re.compile(r"^!(.*?)(?:\|.*)?$")
_LINK_RE = re.compile(r"^(.*?)\|(.*)$")

_ANCHOR_SPAN_RE = re.compile(r'<a href="(.*?)">(.*?)</a>')
_EMOJI_SPAN_RE = re.compile(r"<emoji>([a-z0-9_-]+)</emoji>")
_MRKDWN_SPAN_RE = re.compile(r"<mrkdwn>(.*?)</mrkdwn>")
_IGNORE_SPAN_RE = re.compile(r"<ignore>(.*?)</ignore>")


# ---------------------------------------------------------------------------
# Span variants
# ---------------------------------------------------------------------------


class SpanKind(str, enum.Enum):
    """The kinds of <payload> token Slack text can contain."""

    MENTION = "mention"
    SUBTEAM = "subteam"
    DATE = "date"
    SPECIAL = "special"
    LINK = "link"
    PLAIN = "plain"


@dataclass(frozen=True)
class Span:
    """A classified <payload> token, ready to render as a tagged span.

    RULES:
    - content: the payload for MENTION/DATE/PLAIN, the "@name" text for
      SPECIAL, the label for LINK, empty for SUBTEAM
    - url: only set for LINK
    """

    kind: SpanKind
    content: str = ""
    url: str = ""

    def render(self) -> str:
        """Render the span in the form DeepL receives it."""
        if self.kind == SpanKind.SUBTEAM:
            return SUBTEAM_PLACEHOLDER
        if self.kind == SpanKind.SPECIAL:
            return _wrap(TAG_IGNORE, self.content)
        if self.kind == SpanKind.LINK:
            return '<a href="{}">{}</a>'.format(self.url, self.content)
        return _wrap(TAG_MRKDWN, self.content)


def _wrap(tag: str, content: str) -> str:
    return "<{0}>{1}</{0}>".format(tag, content)


def classify_token(payload: str) -> Span:
    """Classify the inside of a <payload> token. Rules are tried in order."""
    if _MENTION_RE.match(payload):
        return Span(SpanKind.MENTION, payload)
    if _SUBTEAM_RE.match(payload):
        return Span(SpanKind.SUBTEAM)
    if _DATE_RE.match(payload):
        return Span(SpanKind.DATE, payload)
    if payload.startswith("!"):
        special = _SPECIAL_RE.match(payload)
        if special is None:
            return Span(SpanKind.SPECIAL, SPECIAL_MENTION_FALLBACK)
        return Span(SpanKind.SPECIAL, "@" + special.group(1))
    link = _LINK_RE.match(payload)
    if link is not None:
        return Span(SpanKind.LINK, link.group(2), url=link.group(1))
    return Span(SpanKind.PLAIN, payload)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def protect_markup(text: str) -> str:
    """Rewrite Slack tokens in *text* into spans DeepL will leave alone."""
    protected = _TOKEN_RE.sub(lambda m: classify_token(m.group(1)).render(), text)
    return _EMOJI_RE.sub(lambda m: _wrap(TAG_EMOJI, m.group(1)), protected)


def restore_markup(text: str) -> str:
    """Turn a translated, protected string back into Slack markup."""
    restored = _ANCHOR_SPAN_RE.sub(
        lambda m: "<{}|{}>".format(m.group(1), m.group(2)), text
    )
    restored = _EMOJI_SPAN_RE.sub(lambda m: ":{}:".format(m.group(1)), restored)
    restored = _MRKDWN_SPAN_RE.sub(lambda m: "<{}>".format(m.group(1)), restored)
    return _IGNORE_SPAN_RE.sub(lambda m: m.group(1), restored)

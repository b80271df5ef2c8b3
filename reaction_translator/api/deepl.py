"""HTTP client for the DeepL text translation API.

WHY: The relay sends protected Slack text to DeepL with XML tag handling
so that the tagged spans survive translation. This module hides the
endpoint selection, authentication and response parsing behind one
translate() call.

HOW: Uses httpx.Client with the "DeepL-Auth-Key" authorization header.
Free-tier keys (suffix ":fx") talk to api-free.deepl.com, all others to
api.deepl.com. The request is form-encoded, as DeepL's v2 API accepts.

RULES:
- Any non-200 response raises DeepLAPIError (no retries)
- An empty or absent "translations" list returns None
- target_lang is sent upper-cased
- Call close() (or use as a context manager) to release the connection pool
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import httpx

from reaction_translator.config import (
    DEEPL_API_URL,
    DEEPL_FREE_API_URL,
    DEEPL_FREE_KEY_SUFFIX,
    HTTP_TIMEOUT_S,
)

logger = logging.getLogger(__name__)


class DeepLAPIError(Exception):
    """Raised when the DeepL API returns a non-success response.

    RULES:
    - Always include status_code and message
    - message is the response body text
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"DeepL API error {status_code}: {message}")


def deepl_base_url(auth_key: str) -> str:
    """Pick the DeepL host matching the key's plan."""
    if auth_key.endswith(DEEPL_FREE_KEY_SUFFIX):
        return DEEPL_FREE_API_URL
    return DEEPL_API_URL


class DeepLClient:
    """Synchronous client for POST /v2/translate.

    RULES:
    - base_url defaults to deepl_base_url(auth_key)
    - transport is only for tests (httpx.MockTransport)
    """

    def __init__(
        self,
        auth_key: str,
        base_url: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = (base_url or deepl_base_url(auth_key)).rstrip("/")
        self._client = httpx.Client(
            base_url=self._base_url,
            headers={"Authorization": f"DeepL-Auth-Key {auth_key}"},
            timeout=httpx.Timeout(HTTP_TIMEOUT_S, connect=10.0),
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def __enter__(self) -> DeepLClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        self.close()

    def close(self) -> None:
        self._client.close()

    def translate(
        self,
        text: str,
        target_lang: str,
        tag_handling: str | None = "xml",
        ignore_tags: Sequence[str] = (),
    ) -> str | None:
        """Translate *text* into *target_lang* and return the first result.

        Args:
            text: Source text; may contain XML spans when tag_handling is set.
            target_lang: DeepL target language code, any case (e.g. "ja", "en-us").
            tag_handling: "xml" or "html", or None for plain text.
            ignore_tags: Tag names whose content DeepL must leave untouched.

        Returns:
            The translated text, or None if DeepL returned no translations.
        """
        data = {"text": text, "target_lang": target_lang.upper()}
        if tag_handling:
            data["tag_handling"] = tag_handling
        if ignore_tags:
            data["ignore_tags"] = ",".join(ignore_tags)

        resp = self._client.post("/translate", data=data)
        if resp.status_code != 200:
            raise DeepLAPIError(resp.status_code, resp.text)

        translations = resp.json().get("translations") or []
        if not translations:
            return None
        first = translations[0]
        logger.debug(
            "DeepL translated %d chars from %s to %s",
            len(text),
            first.get("detected_source_language", "?"),
            target_lang.upper(),
        )
        return first.get("text")

"""Tests for the DeepL translation client.

HOW: httpx.MockTransport stands in for the DeepL API, so requests are
inspected exactly as they would be sent on the wire.
"""

from __future__ import annotations

from typing import List
from urllib.parse import parse_qs

import httpx
import pytest

from reaction_translator.api.deepl import DeepLAPIError, DeepLClient, deepl_base_url


def _client(handler, auth_key: str = "secret-key:fx") -> DeepLClient:
    return DeepLClient(auth_key=auth_key, transport=httpx.MockTransport(handler))


def _form(request: httpx.Request) -> dict:
    return {k: v[0] for k, v in parse_qs(request.content.decode("utf-8")).items()}


class TestBaseUrl:

    def test_free_key_uses_free_host(self):
        assert deepl_base_url("abc:fx") == "https://api-free.deepl.com/v2"

    def test_pro_key_uses_pro_host(self):
        assert deepl_base_url("abc") == "https://api.deepl.com/v2"

    def test_explicit_base_url(self):
        with DeepLClient("abc", base_url="http://localhost:9000/v2/") as client:
            assert client.base_url == "http://localhost:9000/v2"


class TestTranslate:

    def test_sends_form_request(self):
        seen = []  # type: List[httpx.Request]

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={
                "translations": [{"detected_source_language": "EN", "text": "Bonjour"}],
            })

        with _client(handler) as client:
            result = client.translate(
                "Hello <emoji>wave</emoji>",
                target_lang="fr",
                tag_handling="xml",
                ignore_tags=("emoji", "mrkdwn", "ignore"),
            )

        assert result == "Bonjour"
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "https://api-free.deepl.com/v2/translate"
        assert request.headers["Authorization"] == "DeepL-Auth-Key secret-key:fx"
        assert request.headers["Content-Type"].startswith("application/x-www-form-urlencoded")
        assert _form(request) == {
            "text": "Hello <emoji>wave</emoji>",
            "target_lang": "FR",
            "tag_handling": "xml",
            "ignore_tags": "emoji,mrkdwn,ignore",
        }

    def test_pro_key_hits_pro_host(self):
        urls = []

        def handler(request: httpx.Request) -> httpx.Response:
            urls.append(str(request.url))
            return httpx.Response(200, json={"translations": [{"text": "Hallo"}]})

        with _client(handler, auth_key="pro-key") as client:
            client.translate("Hello", target_lang="de")

        assert urls == ["https://api.deepl.com/v2/translate"]

    def test_plain_text_mode_omits_tag_options(self):
        forms = []

        def handler(request: httpx.Request) -> httpx.Response:
            forms.append(_form(request))
            return httpx.Response(200, json={"translations": [{"text": "Hallo"}]})

        with _client(handler) as client:
            client.translate("Hello", target_lang="de", tag_handling=None)

        assert forms == [{"text": "Hello", "target_lang": "DE"}]

    def test_non_200_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(456, text="Quota exceeded")

        with _client(handler) as client:
            with pytest.raises(DeepLAPIError) as exc_info:
                client.translate("Hello", target_lang="de")

        assert exc_info.value.status_code == 456
        assert "Quota exceeded" in str(exc_info.value)

    @pytest.mark.parametrize("payload", [{}, {"translations": []}, {"translations": None}])
    def test_empty_translations_return_none(self, payload):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=payload)

        with _client(handler) as client:
            assert client.translate("Hello", target_lang="de") is None

from __future__ import annotations

import pytest

from submanager.api.gemini_client import (
    DRAFT_FALLBACK,
    INSIGHTS_FALLBACK,
    GeminiClient,
    _first_text,
)

from .conftest import make_account


def _client_returning(monkeypatch, raw):
    client = GeminiClient(api_key="test-key")
    prompts = []

    async def fake_generate(prompt, response_schema=None):
        prompts.append((prompt, response_schema))
        return raw

    monkeypatch.setattr(client, "_generate", fake_generate)
    return client, prompts


async def test_missing_key_gives_fallbacks(today, alice) -> None:
    client = GeminiClient(api_key="")

    assert await client.parse_accounts("Netflix", today) == []
    assert await client.draft_renewal_message(alice, "Netflix", today) == DRAFT_FALLBACK
    assert await client.summarize([], []) == INSIGHTS_FALLBACK
    assert client.session is None


async def test_parse_accounts_reads_json_array(monkeypatch, today) -> None:
    client, prompts = _client_returning(
        monkeypatch,
        '[{"serviceName": "Netflix", "expiryDate": "2025-02-15", "totalSlots": 5}, "junk"]',
    )

    result = await client.parse_accounts("netflix renews in 1 month", today)

    assert result == [{"serviceName": "Netflix", "expiryDate": "2025-02-15", "totalSlots": 5}]
    prompt, schema = prompts[0]
    assert "2025-01-15" in prompt
    assert schema["type"] == "ARRAY"


async def test_parse_accounts_wraps_single_object(monkeypatch, today) -> None:
    client, _ = _client_returning(monkeypatch, '{"serviceName": "Spotify", "expiryDate": "2025-03-01"}')

    assert await client.parse_accounts("spotify", today) == [
        {"serviceName": "Spotify", "expiryDate": "2025-03-01"},
    ]


@pytest.mark.parametrize("raw", ["not json at all", "42", None])
async def test_parse_accounts_bad_output_is_empty(monkeypatch, today, raw) -> None:
    client, _ = _client_returning(monkeypatch, raw)

    assert await client.parse_accounts("whatever", today) == []


async def test_draft_message_prompt_mentions_client(monkeypatch, today, alice) -> None:
    client, prompts = _client_returning(monkeypatch, "Hi Alice, your Netflix ends soon!")

    text = await client.draft_renewal_message(alice, "Netflix", today)

    assert text == "Hi Alice, your Netflix ends soon!"
    assert "Alice" in prompts[0][0]
    assert "2025-01-15" in prompts[0][0]
    assert prompts[0][1] is None


async def test_summary_prompt_includes_usage(monkeypatch) -> None:
    client, prompts = _client_returning(monkeypatch, "Healthy.")

    assert await client.summarize([make_account()], []) == "Healthy."
    assert "Netflix: 0/1 slots used" in prompts[0][0]


def test_first_text_joins_parts() -> None:
    data = {"candidates": [{"content": {"parts": [{"text": "Hello "}, {"text": "there"}]}}]}

    assert _first_text(data) == "Hello there"
    assert _first_text({"candidates": []}) is None
    assert _first_text({"promptFeedback": {"blockReason": "SAFETY"}}) is None
    assert _first_text("nope") is None

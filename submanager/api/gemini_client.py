"""
Gemini API client - text extraction, message drafting and insights.

Every public method turns transport or parsing failures into a fallback
value, so callers never see an exception from here.
"""
import asyncio
import aiohttp
import json
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from ..models.entities import Account, Client

logger = logging.getLogger(__name__)

API_URL_BASE = "https://generativelanguage.googleapis.com/v1beta"

DRAFT_FALLBACK = "Could not generate message."
INSIGHTS_FALLBACK = "No insights available."

ACCOUNT_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "serviceName": {"type": "STRING"},
            "email": {"type": "STRING"},
            "password": {"type": "STRING"},
            "expiryDate": {"type": "STRING"},
            "totalSlots": {"type": "INTEGER"}
        },
        "required": ["serviceName", "expiryDate", "totalSlots"]
    }
}


class GeminiClient:
    """Async client for the Gemini generateContent endpoint"""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        timeout_seconds: float = 30.0,
        api_url_base: str = API_URL_BASE
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self.url = f"{api_url_base.rstrip('/')}/models/{model}:generateContent"
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        """Context manager entry"""
        self.session = aiohttp.ClientSession(timeout=self.timeout)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        if self.session:
            await self.session.close()

    async def _ensure_session(self):
        """Ensure session exists"""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(timeout=self.timeout)

    async def _generate(self, prompt: str, response_schema: Optional[Dict] = None) -> Optional[str]:
        """
        Send one prompt and return the text of the first candidate.

        Returns:
            The generated text, or None on any failure
        """
        if not self.api_key:
            logger.error("GEMINI_API_KEY is not configured")
            return None

        await self._ensure_session()

        body: Dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}]
        }
        if response_schema is not None:
            body["generationConfig"] = {
                "responseMimeType": "application/json",
                "responseSchema": response_schema
            }

        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json"
        }

        try:
            async with self.session.post(self.url, json=body, headers=headers) as response:
                if response.status != 200:
                    preview = (await response.text())[:500]
                    logger.error(f"Gemini request failed: status={response.status} body={preview}")
                    return None
                data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Gemini request to {self.url} failed: {e}")
            return None
        except json.JSONDecodeError as e:
            logger.error(f"Gemini returned non-JSON response: {e}")
            return None

        return _first_text(data)

    async def parse_accounts(self, text: str, today: date) -> List[Dict[str, Any]]:
        """
        Extract master account descriptors from free text.

        Args:
            text: Anything the user pasted (receipts, notes, chat logs)
            today: Day used to resolve relative dates like "1 month"

        Returns:
            List of partial account dicts; empty on failure
        """
        prompt = (
            "Extract subscription Master Account details from the text.\n\n"
            "Return a JSON array where each object has:\n"
            "- 'serviceName' (e.g. Netflix, Spotify)\n"
            "- 'email'\n"
            "- 'password'\n"
            "- 'expiryDate' (Master billing expiry, YYYY-MM-DD). If relative "
            f"(e.g. \"1 month\"), calculate from {today.isoformat()}.\n"
            "- 'totalSlots' (Number of slots available in this family plan. Default "
            "to 1 if not specified, 5 for Netflix Family, 6 for Spotify Family).\n\n"
            f"Text: \"{text}\""
        )

        raw = await self._generate(prompt, response_schema=ACCOUNT_SCHEMA)
        if raw is None:
            return []

        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            logger.error(f"Failed to parse Gemini response: {raw[:200]}")
            return []

        if isinstance(parsed, dict):
            parsed = [parsed]
        if not isinstance(parsed, list):
            return []
        return [item for item in parsed if isinstance(item, dict)]

    async def draft_renewal_message(self, client: Client, service_name: str, expiry_date: date) -> str:
        """Write a short renewal reminder the user can forward to a client"""
        prompt = (
            "Write a short, friendly WhatsApp renewal reminder for a client.\n\n"
            f"Client Name: {client.name}\n"
            f"Service: {service_name}\n"
            f"Expiry Date: {expiry_date.isoformat()}\n\n"
            "Message should be concise, mention the date, and ask if they want to renew."
        )
        return await self._generate(prompt) or DRAFT_FALLBACK

    async def summarize(self, accounts: Sequence[Account], clients: Sequence[Client]) -> str:
        """Two-sentence health summary of the business; advisory only"""
        stats = {
            "totalAccounts": len(accounts),
            "totalClients": len(clients),
            "slotsUsage": [
                f"{a.service_name}: {sum(1 for s in a.slots if s.client_id)}/{a.total_slots} slots used"
                for a in accounts
            ],
            "masterHealth": [
                {"service": a.service_name, "status": a.status} for a in accounts
            ]
        }
        prompt = (
            "Analyze this subscription business data and give a 2-sentence summary of "
            "health and opportunities (e.g. \"High utilization on Netflix, consider "
            "buying another family plan.\").\n"
            f"Data: {json.dumps(stats)}"
        )
        return await self._generate(prompt) or INSIGHTS_FALLBACK


def _first_text(data: Any) -> Optional[str]:
    """Pull the concatenated text parts of the first candidate"""
    if not isinstance(data, dict):
        return None
    candidates = data.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        finish = (data.get("promptFeedback") or {}).get("blockReason")
        logger.warning(f"Gemini response has no candidates (blockReason={finish})")
        return None

    parts = (candidates[0].get("content") or {}).get("parts") or []
    text = "".join(p.get("text", "") for p in parts if isinstance(p, dict))
    return text.strip() or None

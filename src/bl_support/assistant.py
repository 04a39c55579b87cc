"""Support assistant backed by the Gemini ``generateContent`` REST endpoint.

The assistant never raises: a missing API key, an HTTP failure, a timeout
or an unexpected payload all produce FALLBACK_MESSAGE and a log line.
"""

import logging
from typing import Any

import httpx

from config.settings import settings

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = (
    "Sorry, I had a problem processing your message. Please try again in a moment."
)

_PERSONA = (
    'You are the official support assistant of the "{app_name}" app. '
    "Help users with questions about bets, deposits, withdrawals and the pool rules. "
    "Be cordial, efficient and keep a professional tone. "
    "Deposits are manual: the user transfers to the payment key and submits the receipt, "
    "and an administrator approves it before the balance is credited. "
    "Withdrawals reserve the amount immediately and are paid out after admin approval; "
    "only prize winnings are withdrawable. "
    "Every participant in a pool stakes the same amount; the platform keeps a 10% fee "
    "and the rest is split equally among the winners. "
    "The current payment key is {payment_key}."
)


class SupportAssistant:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else settings.SUPPORT_API_KEY
        self._base_url = (base_url or settings.SUPPORT_API_URL).rstrip("/")
        self._model = model or settings.SUPPORT_MODEL
        self._timeout = timeout or settings.SUPPORT_TIMEOUT_SECONDS
        self._transport = transport

    def system_instruction(self, payment_key: str) -> str:
        return _PERSONA.format(
            app_name=settings.APP_NAME, payment_key=payment_key or "not configured"
        )

    def _build_payload(self, user_message: str, payment_key: str) -> dict[str, Any]:
        return {
            "systemInstruction": {"parts": [{"text": self.system_instruction(payment_key)}]},
            "contents": [{"role": "user", "parts": [{"text": user_message}]}],
        }

    @staticmethod
    def _extract_text(body: Any) -> str:
        parts = body["candidates"][0]["content"]["parts"]
        text = "".join(str(p.get("text", "")) for p in parts).strip()
        if not text:
            raise ValueError("empty completion")
        return text

    async def answer(self, user_message: str, payment_key: str = "") -> str:
        """Reply to one user message. Returns FALLBACK_MESSAGE on any failure."""
        if not self._api_key:
            logger.warning("Support assistant called without SUPPORT_API_KEY")
            return FALLBACK_MESSAGE

        url = f"{self._base_url}/models/{self._model}:generateContent"
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    url,
                    params={"key": self._api_key},
                    json=self._build_payload(user_message, payment_key),
                )
                response.raise_for_status()
                return self._extract_text(response.json())
        except httpx.HTTPStatusError as e:
            logger.warning("Support API returned status %d", e.response.status_code)
        except httpx.HTTPError as e:
            logger.warning("Support API request failed: %s", e)
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Support API returned an unexpected payload: %r", e)
        return FALLBACK_MESSAGE

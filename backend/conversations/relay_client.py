import logging
from typing import Dict, Optional, Sequence

import requests

from settings import settings

from .exceptions import RelayError

logger = logging.getLogger(__name__)


class RelayClient:
    """HTTP client for the backend chat relay."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 90.0,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _post(self, path: str, payload: Optional[Dict] = None) -> Dict:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.post(url, json=payload or {}, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Relay request to {path} failed: {str(e)}")
            raise RelayError(f"Could not reach the chat relay: {str(e)}") from e

        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            data = {}

        if not response.ok:
            message = data.get("error") or f"Relay request failed with status {response.status_code}"
            raise RelayError(message, status=response.status_code, details=data)
        return data

    def chat(self, messages: Sequence[Dict], conversation_id: str) -> str:
        """Send the message list and return the assistant reply."""
        data = self._post("/api/chat", {
            "messages": list(messages),
            "conversation_id": conversation_id
        })
        reply = data.get("message")
        if not isinstance(reply, str) or not reply:
            raise RelayError("Invalid response from API", details=data)
        return reply

    def summarize(self, text: str, token_count: Optional[int] = None) -> Dict:
        """Return the raw {summary, keyTerms} payload for a block of text."""
        payload = {"text": text}
        if token_count is not None:
            payload["tokenCount"] = token_count
        return self._post("/api/summarize", payload)

    def seed_sample_data(self) -> Dict:
        return self._post("/api/sample-data")

    def close(self) -> None:
        self.session.close()


def get_relay_client() -> RelayClient:
    """Build a relay client pointed at the configured backend."""
    return RelayClient(settings.api_url, timeout=settings.relay_timeout_seconds)

"""HTTP client for the ElevenLabs conversational AI signed-URL handshake."""

from __future__ import annotations

import logging

import httpx

from hallaien import config
from hallaien.errors import UpstreamUnavailable

logger = logging.getLogger(__name__)


class VoiceGateway:
    """Exchanges an external agent reference for a short-lived signed URL.

    Callers must have confirmed access (owner, or a granted resolution)
    before calling get_signed_url.
    """

    def __init__(self) -> None:
        self._base_url = config.settings.ELEVENLABS_API_URL.rstrip("/")
        self._api_key = config.settings.ELEVENLABS_API_KEY
        self._timeout = config.settings.ELEVENLABS_TIMEOUT_SECONDS

    async def get_signed_url(self, external_agent_ref: str) -> str:
        """
        Request a signed conversation URL for an agent.

        Args:
            external_agent_ref: ElevenLabs agent id

        Returns:
            Signed websocket URL for the browser

        Raises:
            UpstreamUnavailable: API key missing, transport failure, non-2xx
                response or a body without signed_url
        """
        if not self._api_key:
            logger.error("ELEVENLABS_API_KEY is not configured")
            raise UpstreamUnavailable("Voice service is not configured.")

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(
                    f"{self._base_url}/v1/convai/conversation/get_signed_url",
                    params={"agent_id": external_agent_ref},
                    headers={"xi-api-key": self._api_key},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "ElevenLabs returned %s for agent %s: %s",
                exc.response.status_code,
                external_agent_ref,
                exc.response.text,
            )
            raise UpstreamUnavailable() from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("ElevenLabs signed URL request failed for agent %s: %s", external_agent_ref, exc)
            raise UpstreamUnavailable() from exc

        signed_url = data.get("signed_url") if isinstance(data, dict) else None
        if not signed_url:
            logger.error("ElevenLabs response for agent %s had no signed_url", external_agent_ref)
            raise UpstreamUnavailable()
        return signed_url


voice_gateway = VoiceGateway()

"""Opening a voice session: access check first, then the signed-URL handshake."""

from __future__ import annotations

import logging
from uuid import UUID

from hallaien.errors import AccessDeniedError, AssistantNotFound
from hallaien.models.assistant import Assistant
from hallaien.models.user import Principal
from hallaien.repos.assistant_repo import AssistantRepo
from hallaien.services.access_resolver import AccessResolver, access_resolver
from hallaien.services.voice_gateway import VoiceGateway, voice_gateway

logger = logging.getLogger(__name__)


class VoiceSessionService:
    """Gatekeeper in front of the voice gateway."""

    def __init__(
        self,
        assistants: AssistantRepo | None = None,
        resolver: AccessResolver | None = None,
        gateway: VoiceGateway | None = None,
    ) -> None:
        self._assistants = assistants or AssistantRepo()
        self._resolver = resolver or access_resolver
        self._gateway = gateway or voice_gateway

    async def authorize(self, principal: Principal, assistant_id: UUID) -> Assistant:
        """
        Return the assistant if the principal owns it or resolution grants access.

        Raises:
            AssistantNotFound: No such assistant
            AccessDeniedError: Not the owner and resolution denied
        """
        assistant = await self._assistants.get(assistant_id)
        if assistant is None:
            raise AssistantNotFound(assistant_id)

        if assistant.teacher_id == principal.id:
            return assistant

        decision = await self._resolver.resolve(principal.id, assistant_id)
        if not decision.granted:
            logger.info("Denied voice session for %s on assistant %s", principal.id, assistant_id)
            raise AccessDeniedError()
        return assistant

    async def signed_url(self, principal: Principal, assistant_id: UUID) -> str:
        """
        Authorize, then fetch a signed URL for the assistant's agent.

        Raises:
            AssistantNotFound, AccessDeniedError: From authorize()
            UpstreamUnavailable: The voice service failed
        """
        assistant = await self.authorize(principal, assistant_id)
        return await self._gateway.get_signed_url(assistant.external_agent_ref)


voice_session_service = VoiceSessionService()

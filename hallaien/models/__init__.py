"""
Pydantic models for Hallaien.

All data shapes defined here. No imports from db, repos, or routes.
"""

from hallaien.models.access import (
    AccessDecision,
    AccessDenied,
    AccessGrant,
    AccessibleAssistant,
    ProgramAccess,
    RedeemResult,
    ShareCodeAccess,
    StudentAssistantResponse,
)
from hallaien.models.assistant import (
    Assistant,
    AssistantResponse,
    AssistantSummary,
    CreateAssistantRequest,
    UpdateAssistantRequest,
)
from hallaien.models.program import AssistantProgramsResponse, Program
from hallaien.models.share_code import (
    RedeemRequest,
    RedeemResponse,
    ShareCode,
    ShareCodeResponse,
)
from hallaien.models.user import Principal, ProfileResponse, Role, UpdateProfileRequest
from hallaien.models.voice import SignedUrlRequest, SignedUrlResponse

__all__ = [
    # Principal models
    "Principal",
    "ProfileResponse",
    "Role",
    "UpdateProfileRequest",
    # Program models
    "Program",
    "AssistantProgramsResponse",
    # Assistant models
    "Assistant",
    "AssistantResponse",
    "AssistantSummary",
    "CreateAssistantRequest",
    "UpdateAssistantRequest",
    # Share code models
    "ShareCode",
    "ShareCodeResponse",
    "RedeemRequest",
    "RedeemResponse",
    # Access models
    "AccessGrant",
    "AccessDecision",
    "AccessDenied",
    "ShareCodeAccess",
    "ProgramAccess",
    "AccessibleAssistant",
    "StudentAssistantResponse",
    "RedeemResult",
    # Voice models
    "SignedUrlRequest",
    "SignedUrlResponse",
]

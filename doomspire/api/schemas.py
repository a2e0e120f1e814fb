"""
Pydantic Schemas for API - Request/response models for OpenAPI.

Error Codes:
- REQUEST_NOT_FOUND: Decision request does not exist or was already answered
- INVALID_OPTION: Submitted choice is not one of the request's options
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

from ..engine_core.decision import DecisionOption


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    REQUEST_NOT_FOUND = "REQUEST_NOT_FOUND"
    INVALID_OPTION = "INVALID_OPTION"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Request Models
# =============================================================================

class AnswerRequest(BaseModel):
    """A player's answer to a pending decision."""
    choice: str = Field(..., description="Option id to select")
    reasoning: str = Field("", description="Optional rationale shown in logs")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class PendingDecisionResponse(BaseModel):
    """A decision waiting for a player."""
    request_id: str
    player: str
    type: str
    description: str
    options: list[DecisionOption] = Field(default_factory=list)
    created_at: datetime


class PendingListResponse(BaseModel):
    """Pending decisions, oldest first."""
    decisions: list[PendingDecisionResponse] = Field(default_factory=list)
    total: int = 0


class AnswerResponse(BaseModel):
    """Response after answering a decision."""
    success: bool
    request_id: str
    choice: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    environment: str
    pending_decisions: int = 0

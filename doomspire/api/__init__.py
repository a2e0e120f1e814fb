"""
API Module - Remote decision interface.

Exposes pending decisions over REST so a browser or another process
can play a seat:
1. A RemoteAgent parks each question in the DecisionBroker
2. The UI lists pending questions for its player
3. The UI posts the chosen option id back
4. The waiting resolution resumes

All state is in memory and lives as long as the broker.
"""

from .schemas import (
    # Requests
    AnswerRequest,
    # Responses
    AnswerResponse,
    ErrorResponse,
    HealthResponse,
    PendingDecisionResponse,
    PendingListResponse,
    # Enums
    ErrorCode,
)
from .service import DecisionBroker, PendingDecision
from .app import create_app

__all__ = [
    # Requests
    "AnswerRequest",
    # Responses
    "AnswerResponse",
    "ErrorResponse",
    "HealthResponse",
    "PendingDecisionResponse",
    "PendingListResponse",
    # Enums
    "ErrorCode",
    # Service
    "DecisionBroker",
    "PendingDecision",
    "create_app",
]

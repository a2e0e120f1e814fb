"""
FastAPI Application - REST API for remote decision makers.

Endpoints:
    GET    /api/v1/health                     Health check
    GET    /api/v1/decisions?player=<name>    List pending decisions
    GET    /api/v1/decisions/{request_id}     Get one pending decision
    POST   /api/v1/decisions/{request_id}     Answer a pending decision

A game running RemoteAgents parks each question in the shared
DecisionBroker; a UI polls the list, shows the options and posts the
chosen option id back, which resumes the waiting resolution.
"""

from typing import Optional
import os

from .. import __version__

# Environment configuration
DOOMSPIRE_ENV = os.getenv("DOOMSPIRE_ENV", "development")
ALLOWED_ORIGINS = os.getenv("DOOMSPIRE_ALLOWED_ORIGINS", "*").split(",")


def create_app(broker=None):
    """
    Create the FastAPI application.

    Args:
        broker: Optional DecisionBroker shared with the game's RemoteAgents
            (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Query
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from ..errors import DecisionError, EntityNotFoundError
    from .service import DecisionBroker, PendingDecision
    from .schemas import (
        # Request models
        AnswerRequest,
        # Response models
        AnswerResponse,
        ErrorResponse,
        HealthResponse,
        PendingDecisionResponse,
        PendingListResponse,
        # Enums
        ErrorCode,
    )

    app = FastAPI(
        title="Doomspire Decision API",
        description="""
Remote decision endpoint for Lords of Doomspire.

## Error Codes

| Code | Description |
|------|-------------|
| `REQUEST_NOT_FOUND` | Decision request does not exist or was already answered |
| `INVALID_OPTION` | Choice is not one of the request's option ids |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    decision_broker = broker if broker is not None else DecisionBroker()
    app.state.broker = decision_broker

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(),
        )

    def to_response(pending: PendingDecision) -> PendingDecisionResponse:
        return PendingDecisionResponse(
            request_id=pending.request_id,
            player=pending.player,
            type=pending.context.type,
            description=pending.context.description,
            options=pending.context.options,
            created_at=pending.created_at,
        )

    # =========================================================================
    # Decision Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/decisions",
        response_model=PendingListResponse,
        tags=["Decisions"],
        summary="List pending decisions",
    )
    async def list_decisions(
        player: Optional[str] = Query(None, description="Only this player's requests"),
    ) -> PendingListResponse:
        pending = decision_broker.list_pending(player)
        return PendingListResponse(
            decisions=[to_response(p) for p in pending],
            total=len(pending),
        )

    @app.get(
        "/api/v1/decisions/{request_id}",
        response_model=PendingDecisionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Decisions"],
        summary="Get a pending decision",
    )
    async def get_decision(request_id: str):
        try:
            return to_response(decision_broker.get(request_id))
        except EntityNotFoundError as e:
            return make_error_response(ErrorCode.REQUEST_NOT_FOUND, str(e), 404)

    @app.post(
        "/api/v1/decisions/{request_id}",
        response_model=AnswerResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Choice is not a valid option"},
            404: {"model": ErrorResponse, "description": "Unknown request"},
        },
        tags=["Decisions"],
        summary="Answer a pending decision",
    )
    async def answer_decision(request_id: str, request: AnswerRequest):
        """
        Answer a pending decision with one of its option ids.

        The waiting game resumes as soon as the answer is accepted.
        """
        try:
            decision = decision_broker.answer(request_id, request.choice, request.reasoning)
        except EntityNotFoundError as e:
            return make_error_response(ErrorCode.REQUEST_NOT_FOUND, str(e), 404)
        except DecisionError as e:
            return make_error_response(
                ErrorCode.INVALID_OPTION,
                str(e),
                details={"choice": request.choice},
            )
        return AnswerResponse(success=True, request_id=request_id, choice=decision.choice_id)

    # =========================================================================
    # Health
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="doomspire-decisions",
            version=__version__,
            environment=DOOMSPIRE_ENV,
            pending_decisions=len(decision_broker.list_pending()),
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Doomspire Decision API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/api/v1/health",
        }

    return app


# For running directly: uvicorn doomspire.api.app:app
app = None
try:
    app = create_app()
except ImportError:
    # FastAPI not installed
    pass

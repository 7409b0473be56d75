"""FastAPI server for the pod points calculator.

Every route answers with HTTP 200 and JSON. Failures are reported through an
`error` field in the body.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ValidationError

from podstakes import __version__
from podstakes.api.models import CalcRequest, SimulateRequest
from podstakes.calculator import (
    SimulationError,
    calculate_brackets,
    simulate_pool,
    simulate_tournament,
)
from podstakes.config import Settings, get_settings
from podstakes.exceptions import PlayerNotFoundError
from podstakes.observability import initialize_logfire
from podstakes.services.topdeck import (
    TopdeckAPIError,
    TopdeckClient,
    TopdeckConfig,
    create_topdeck_client,
)

logger = logging.getLogger(__name__)

MISSING_CALC_INPUT = "Missing URLs or username"
CALC_FAILED = "Failed to fetch data or calculate outcomes."
INVALID_SIMULATION = "Invalid simulation request."
SIMULATION_FETCH_FAILED = "Failed to fetch tournament data."

router = APIRouter()


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_topdeck_client(settings: Settings = Depends(get_app_settings)) -> TopdeckClient:
    """Build an unopened upstream client for the current request."""
    return create_topdeck_client(
        api_key=settings.topdeck_api_key,
        config=TopdeckConfig(**settings.topdeck.model_dump()),
    )


async def _parse_body(request: Request, model: type[BaseModel]) -> BaseModel | None:
    """Decode a JSON body into `model`, returning None when it does not fit."""
    try:
        payload = await request.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        logger.info(f"Rejected {model.__name__}: {e.error_count()} validation errors")
        return None


@router.get("/api/players", tags=["Players"])
async def search_players(
    q: str | None = None,
    client: TopdeckClient = Depends(get_topdeck_client),
) -> list[dict[str, Any]]:
    """Autocomplete player search proxied to Topdeck."""
    if not q:
        return []

    try:
        async with client:
            return await client.search_players(q)
    except Exception as e:
        logger.warning(f"Player search failed for {q!r}: {e}")
        return []


@router.post("/api/calc", tags=["Calculator"])
async def calc(
    request: Request,
    client: TopdeckClient = Depends(get_topdeck_client),
    settings: Settings = Depends(get_app_settings),
):
    """Price the user's pod in each submitted bracket."""
    body = await _parse_body(request, CalcRequest)
    if body is None or body.urls is None or not body.username:
        return {"error": MISSING_CALC_INPUT}

    try:
        async with client:
            results = await calculate_brackets(
                client, body.urls, body.username, stakes=settings.stakes
            )
    except Exception:
        logger.exception(f"Bracket calculation failed for {body.username}")
        return {"error": CALC_FAILED}

    return [r.model_dump(exclude_none=True) for r in results]


@router.post("/api/simulate", tags=["Calculator"])
async def simulate(
    request: Request,
    client: TopdeckClient = Depends(get_topdeck_client),
    settings: Settings = Depends(get_app_settings),
):
    """Price a four-player group, given directly or looked up in a tournament."""
    body = await _parse_body(request, SimulateRequest)
    if body is None:
        return {"error": INVALID_SIMULATION}

    try:
        if body.players is None and body.tournament_id is not None:
            async with client:
                result = await simulate_tournament(
                    client,
                    str(body.tournament_id),
                    body.usernames or [],
                    stakes=settings.stakes,
                )
        else:
            result = simulate_pool(body.players or [], stakes=settings.stakes)
    except (SimulationError, PlayerNotFoundError) as e:
        return {"error": str(e)}
    except TopdeckAPIError as e:
        logger.error(f"Tournament fetch failed for {body.tournament_id}: {e}")
        return {"error": SIMULATION_FETCH_FAILED}
    except Exception:
        logger.exception(f"Simulation failed for tournament {body.tournament_id}")
        return {"error": SIMULATION_FETCH_FAILED}

    return result.model_dump(exclude_none=True)


@router.get("/health", tags=["Health"])
async def health():
    return {"status": "ok", "service": "podstakes"}


@router.get("/", tags=["Root"])
async def root():
    """API information."""
    return {
        "name": "podstakes",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title="podstakes API", version=__version__)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    initialize_logfire(settings, app)
    return app

"""Thumbcraft - FastAPI Application.

This module is the single entry point for the web service.  It defines the
``create_app()`` factory, all REST API routes, the module-level ``app``
used by uvicorn, and the ``main()`` CLI function that launches the server.

Architecture
------------
The application is a thin orchestration layer:

- **Model selection** is done by :func:`~thumbcraft.core.selector.select_model`,
  a keyword rule table with no I/O.
- **Image composition** is done by :class:`~thumbcraft.core.composer.ImageComposer`,
  which only builds URLs; the browser fetches the images from the external
  host itself.
- **Record keeping** uses :class:`~thumbcraft.api.store.GenerationStore`,
  an in-memory store that lives as long as the app instance.

The composer, store and configuration are created by ``create_app()`` and
kept on ``app.state``, so every app (and every test) owns its own store.

Endpoints
---------
========  ============================  ====================================
Method    Path                          Purpose
========  ============================  ====================================
GET       ``/health``                   Liveness check
GET       ``/api/config``               Styles, aspect ratios, models
GET       ``/api/usage/{date}``         Daily usage for the caller
POST      ``/api/analyze-prompt``       Preview the model selection
POST      ``/api/generate-thumbnail``   Compose and record an image batch
GET       ``/api/thumbnail/{id}``       Stored generation record
POST      ``/api/create-variation``     Variation placeholder
GET       ``/api/stats``                Generation statistics
========  ============================  ====================================

Usage
-----
CLI (installed entry point)::

    thumbcraft

Direct invocation::

    python -m thumbcraft.api.main
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, BackgroundTasks, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from thumbcraft import __version__
from thumbcraft.api.models import (
    AnalyzePromptRequest,
    GenerateThumbnailRequest,
    GenerateThumbnailResponse,
    UsageResponse,
    VariationRequest,
    VariationResponse,
)
from thumbcraft.api.store import GenerationStore
from thumbcraft.core.composer import DIMENSIONS, ImageComposer, aggregate_quality_score
from thumbcraft.core.config import ThumbcraftConfig, config, configure_logging
from thumbcraft.core.models import (
    AspectRatio,
    GenerationRequest,
    ModelSelection,
    Style,
)
from thumbcraft.core.selector import MODEL_CATALOGUE, select_model

logger = logging.getLogger(__name__)

router = APIRouter()

# Model tag reported for variations; no real transformation happens yet.
VARIATION_MODEL = "pollinations-variation"
VARIATION_PROCESSING_TIME = 0.5


# ---------------------------------------------------------------------------
# Request helpers.
# ---------------------------------------------------------------------------


def _client_ip(request: Request) -> str:
    """Return the caller's address, or ``"unknown"`` when unavailable."""
    return request.client.host if request.client else "unknown"


def _today() -> str:
    """Return the current UTC calendar day as ``YYYY-MM-DD``."""
    return datetime.now(timezone.utc).date().isoformat()


def _store(request: Request) -> GenerationStore:
    return request.app.state.store


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Answer schema violations with 400 and a field-level error list.

    Only ``loc``, ``msg`` and ``type`` are returned for each error; the raw
    pydantic context may hold objects that are not JSON serialisable.
    """
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    logger.warning(f"Validation failed for {request.url.path}: {errors}")
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request data", "errors": errors},
    )


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check endpoint."""
    return {"status": "ok"}


@router.get("/api/config")
async def get_config() -> dict:
    """Return the options the generation form offers.

    Returns:
        Dictionary with keys ``version``, ``styles``, ``aspectRatios`` (each
        with its pixel dimensions) and ``models`` (tag, label, description).
    """
    return {
        "version": __version__,
        "styles": [style.value for style in Style],
        "aspectRatios": [
            {"id": ratio.value, "width": DIMENSIONS[ratio.value][0], "height": DIMENSIONS[ratio.value][1]}
            for ratio in AspectRatio
        ],
        "models": [
            {"id": model.value, **details} for model, details in MODEL_CATALOGUE.items()
        ],
    }


@router.get("/api/usage/{date}", response_model=UsageResponse)
def get_usage(date: str, request: Request) -> UsageResponse:
    """Return the caller's generation count for *date*.

    Generations are unlimited; ``generationsLeft`` is a configured constant
    and the count is informational only.

    Args:
        date: Calendar day as ``YYYY-MM-DD``.
        request: Incoming request (used for the caller address).
    """
    usage = _store(request).get_daily_usage(_client_ip(request), date)
    return UsageResponse(
        generations_left=request.app.state.config.generations_left,
        generation_count=usage.generation_count if usage else 0,
    )


@router.post("/api/analyze-prompt", response_model=ModelSelection)
async def analyze_prompt(req: AnalyzePromptRequest) -> ModelSelection:
    """Preview which model would be selected for a prompt, without generating."""
    return select_model(req.prompt, req.style, req.aspect_ratio)


@router.post("/api/generate-thumbnail", response_model=GenerateThumbnailResponse)
def generate_thumbnail(
    req: GenerateThumbnailRequest,
    request: Request,
    background_tasks: BackgroundTasks,
) -> GenerateThumbnailResponse:
    """Compose a batch of images and record the generation.

    This endpoint:

    1. Selects a model tag from the prompt and style.
    2. Composes ``imageCount`` image URLs.
    3. Averages the per-image quality scores (rounded to an integer).
    4. Stores the generation record.
    5. Schedules the caller's daily usage increment to run after the
       response is sent, so the usage count may briefly lag behind
       the response.

    It is a plain ``def`` so FastAPI runs it in the thread pool; the
    composer's pacing delay does not block the event loop.

    Args:
        req: Validated :class:`GenerateThumbnailRequest` payload.
        request: Incoming request (app state and caller address).
        background_tasks: FastAPI background task queue.

    Returns:
        The composed batch and the id of the stored record.

    Raises:
        HTTPException: 500 on any unexpected failure.
    """
    ip_address = _client_ip(request)
    store = _store(request)
    composer: ImageComposer = request.app.state.composer

    try:
        selection = select_model(req.prompt, req.style.value, req.aspect_ratio.value)
        result = composer.generate(
            req.prompt,
            req.style.value,
            req.aspect_ratio.value,
            selection.selected_model,
            selection.reasoning,
            req.image_count,
        )

        quality_score = aggregate_quality_score(result.images)
        record = store.create_generation_request(
            prompt=req.prompt,
            style=req.style,
            aspect_ratio=req.aspect_ratio,
            selected_model=selection.selected_model,
            model_reasoning=selection.reasoning,
            generated_images=result.images,
            generation_time=result.generation_time,
            quality_score=quality_score,
        )
    except Exception:
        logger.exception("Error generating thumbnail")
        raise HTTPException(status_code=500, detail="Failed to generate thumbnail")

    background_tasks.add_task(store.increment_daily_usage, ip_address, _today())

    logger.info(
        f"Generated {len(result.images)} images with {selection.selected_model.value} "
        f"in {result.generation_time}s (record {record.id})"
    )
    return GenerateThumbnailResponse(id=record.id, **result.model_dump())


@router.get("/api/thumbnail/{request_id}", response_model=GenerationRequest)
def get_thumbnail(request_id: str, request: Request) -> GenerationRequest:
    """Return a stored generation record.

    Raises:
        HTTPException: 404 if no record has this id.
    """
    record = _store(request).get_generation_request(request_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Thumbnail request not found")
    return record


@router.post("/api/create-variation", response_model=VariationResponse)
async def create_variation(req: VariationRequest) -> VariationResponse:
    """Return a variation of an image.

    No transformation is performed: ``variationUrl`` echoes the original
    URL.  The response shape is stable so a real implementation can be
    dropped in behind it.
    """
    return VariationResponse(
        id=f"variation-{int(time.time() * 1000)}",
        original_url=req.image_url,
        variation_url=req.image_url,
        variation_type=req.variation_type,
        model=VARIATION_MODEL,
        processing_time=VARIATION_PROCESSING_TIME,
    )


@router.get("/api/stats")
def get_stats(request: Request) -> dict:
    """Return generation statistics.

    Returns:
        Dictionary with ``totalGenerations`` (records in this process) and
        ``generationCountToday`` (the caller's count for the current day).
    """
    store = _store(request)
    usage = store.get_daily_usage(_client_ip(request), _today())
    return {
        "totalGenerations": store.count_generation_requests(),
        "generationCountToday": usage.generation_count if usage else 0,
    }


# ---------------------------------------------------------------------------
# Application factory.
# ---------------------------------------------------------------------------


def create_app(app_config: ThumbcraftConfig | None = None) -> FastAPI:
    """Build a FastAPI app with its own store and composer.

    Args:
        app_config: Configuration to use.  Defaults to the global
            :data:`~thumbcraft.core.config.config` instance.

    Returns:
        A ready-to-serve FastAPI application.
    """
    resolved_config = app_config or config

    app = FastAPI(
        title="Thumbcraft",
        description="Prompt-driven thumbnail generation with rule-based model selection.",
        version=__version__,
    )
    app.state.config = resolved_config
    app.state.store = GenerationStore()
    app.state.composer = ImageComposer(resolved_config)

    # Allow cross-origin requests so the frontend can be served from a
    # different port during development.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.include_router(router)
    return app


app = create_app()


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port and log level from :data:`~thumbcraft.core.config.config`
    (``THUMBCRAFT_SERVER_HOST``, ``THUMBCRAFT_SERVER_PORT``,
    ``THUMBCRAFT_LOG_LEVEL``).  Defaults to ``0.0.0.0:5000``.

    This function is registered as the ``thumbcraft`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    configure_logging(config.log_level)
    uvicorn.run(
        "thumbcraft.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()

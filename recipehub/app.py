from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .analytics.aggregator import compute_analytics
from .analytics.store import EventLog
from .catalog.config import DEFAULT_CATALOG_CONFIG, CatalogConfig, resolve_log_level
from .catalog.data_store import seed_catalog
from .catalog.facets import compute_facets
from .catalog.filtering import apply_filters, sort_recipes
from .catalog.models import FilterRequest, Recipe, RecipeCreate, SortKey
from .catalog.store import CatalogStore
from .recommendations.config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .recommendations.models import SurveyRequest, SurveyResult
from .recommendations.scoring import recommend

logger = logging.getLogger(__name__)

_VALIDATION_MESSAGES = {
    "/api/survey": "Invalid survey data",
    "/api/recipes": "Invalid recipe data",
}

router = APIRouter()


def get_store(request: Request) -> CatalogStore:
    return request.app.state.store


def get_events(request: Request) -> EventLog:
    return request.app.state.events


def get_recommendation_config(request: Request) -> RecommendationConfig:
    return request.app.state.recommendation_config


def _elapsed_ms(start_time: float) -> float:
    return round((time.time() - start_time) * 1000, 1)


# ── Public endpoints ─────────────────────────────────────────────────────


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/metadata")
def metadata(store: CatalogStore = Depends(get_store)) -> dict:
    return compute_facets(store.get_all_recipes())


# ── Catalog endpoints ────────────────────────────────────────────────────


@router.get("/api/recipes", response_model=list[Recipe])
def list_recipes(
    sort_by: SortKey | None = None,
    store: CatalogStore = Depends(get_store),
) -> list[Recipe]:
    return sort_recipes(store.get_all_recipes(), sort_by)


@router.get("/api/recipes/search/{query}", response_model=list[Recipe])
def search_recipes(
    query: str,
    store: CatalogStore = Depends(get_store),
    events: EventLog = Depends(get_events),
) -> list[Recipe]:
    start_time = time.time()
    results = store.search_recipes(query)
    events.record("search", {
        "query": query,
        "results_returned": len(results),
        "response_time_ms": _elapsed_ms(start_time),
    })
    return results


@router.get("/api/recipes/category/{category}", response_model=list[Recipe])
def recipes_by_category(
    category: str,
    store: CatalogStore = Depends(get_store),
) -> list[Recipe]:
    return store.get_recipes_by_category(category)


@router.get("/api/recipes/{recipe_id}", response_model=Recipe)
def get_recipe(recipe_id: str, store: CatalogStore = Depends(get_store)) -> Recipe:
    # A non-numeric id is a lookup miss, not a malformed request
    recipe = store.get_recipe(int(recipe_id)) if recipe_id.isdigit() else None
    if recipe is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe


@router.post("/api/recipes/filter", response_model=list[Recipe])
def filter_recipes(
    body: FilterRequest,
    store: CatalogStore = Depends(get_store),
    events: EventLog = Depends(get_events),
) -> list[Recipe]:
    start_time = time.time()
    results = apply_filters(store.get_all_recipes(), body.criteria(), body.sort_by)
    events.record("filter", {
        **body.model_dump(),
        "results_returned": len(results),
        "response_time_ms": _elapsed_ms(start_time),
    })
    return results


@router.post("/api/recipes", response_model=Recipe, status_code=201)
def create_recipe(body: RecipeCreate, store: CatalogStore = Depends(get_store)) -> Recipe:
    return store.create_recipe(body)


# ── Survey endpoint ──────────────────────────────────────────────────────


@router.post("/api/survey", response_model=SurveyResult)
def submit_survey(
    body: SurveyRequest,
    store: CatalogStore = Depends(get_store),
    events: EventLog = Depends(get_events),
    config: RecommendationConfig = Depends(get_recommendation_config),
) -> SurveyResult:
    start_time = time.time()
    survey = store.create_survey(body)

    recommendations = recommend(store.get_all_recipes(), body, config=config)

    events.record("survey", {
        **body.model_dump(),
        "survey_id": survey.id,
        "recommended_ids": [r.id for r in recommendations],
        "results_returned": len(recommendations),
        "response_time_ms": _elapsed_ms(start_time),
    })
    return SurveyResult(survey=survey, recommendations=recommendations)


# ── Analytics ────────────────────────────────────────────────────────────


@router.get("/analytics")
def analytics(events: EventLog = Depends(get_events)) -> dict:
    return compute_analytics(events.events())


# ── Error handlers ───────────────────────────────────────────────────────


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = "Invalid request data"
    if request.method == "POST":
        message = _VALIDATION_MESSAGES.get(request.url.path, message)
    return JSONResponse(
        status_code=400,
        content={"detail": message, "errors": jsonable_encoder(exc.errors())},
    )


async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(
    store: CatalogStore | None = None,
    catalog_config: CatalogConfig = DEFAULT_CATALOG_CONFIG,
    recommendation_config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> FastAPI:
    """Build the API around ``store``; a fresh store is created and seeded if omitted."""
    logging.getLogger("recipehub").setLevel(resolve_log_level(catalog_config.log_level))

    if store is None:
        store = CatalogStore()
        if catalog_config.seed_on_startup:
            seed_catalog(store, catalog_config)

    app = FastAPI(title="Workflow Recipe Hub API", version="1.0.0")
    app.state.store = store
    app.state.events = EventLog()
    app.state.recommendation_config = recommendation_config

    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(Exception, _unexpected_error)
    app.include_router(router)
    return app


app = create_app()

"""
FastAPI application entry point and endpoint definitions.

This module initializes the FastAPI application and defines the API routes
of the recipe assistant.

Responsibilities:
- Initialize FastAPI application with CORS and error handling
- Define recipe, profile, reference-data and modification endpoints
- Coordinate service layer calls through FastAPI dependencies
- Render every error as {"error": message} with a matching status code
"""

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import List
import logging

from recipe_assistant.config import Settings, get_settings, settings
from recipe_assistant.deps import get_current_user, get_modifier, get_store
from recipe_assistant.exceptions import NotFoundError, RecipeAssistantError
from recipe_assistant.models.modification import ModificationResult, ModifyRequest
from recipe_assistant.models.nutrition import DiseaseTargets, NutrientCatalogEntry
from recipe_assistant.models.profile import UserProfile
from recipe_assistant.models.recipe import Recipe, StoredRecipe
from recipe_assistant.services.recipe_modifier import RecipeModifier
from recipe_assistant.services.record_store import RecordStore

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


def _validation_message(exc: RequestValidationError) -> str:
    """First pydantic error as "field: message"."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    message = str(first.get("msg", "Invalid request")).removeprefix("Value error, ")
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {message}" if location else message


def create_app() -> FastAPI:
    """
    Initialize and configure the FastAPI application.

    Sets up:
    - CORS middleware for frontend communication
    - Exception handlers for consistent error responses
    - Application metadata

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title="Recipe Assistant API",
        description="Personalized recipe nutrition, scaling and AI substitutions",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RecipeAssistantError)
    async def recipe_assistant_error_handler(request: Request, exc: RecipeAssistantError):
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        message = _validation_message(exc)
        logger.info(f"{request.method} {request.url.path} rejected: {message}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": message}
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    # Global exception handler for consistent error responses
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc) or "Internal server error occurred"}
        )

    return app


# Initialize FastAPI application
app = create_app()


@app.get("/")
async def root():
    """
    Root endpoint.

    Returns:
        dict: API status and version information
    """
    return {
        "message": "Recipe Assistant API",
        "version": API_VERSION,
        "status": "running"
    }


@app.get("/health")
async def health_check(
    app_settings: Settings = Depends(get_settings),
    store: RecordStore = Depends(get_store),
):
    """
    Health check endpoint for monitoring and deployment.

    Returns:
        dict: Service status, reasoning configuration and reference data size
    """
    credentials_configured = bool(app_settings.reasoning_api_key())
    warnings = []
    if not credentials_configured:
        warnings.append("Reasoning service API key not configured - substitutions will fail")

    return {
        "status": "healthy",
        "service": "recipe-assistant-api",
        "reasoning": {
            "provider": app_settings.REASONING_PROVIDER,
            "api_key_configured": credentials_configured,
        },
        "reference_data": {
            "catalog_entries": len(store.get_catalog()),
            "diseases": store.list_diseases(),
        },
        "warnings": warnings if warnings else None
    }


# ==================== Recipes ====================

@app.post("/recipes", response_model=StoredRecipe, status_code=status.HTTP_201_CREATED)
async def create_recipe(
    recipe: Recipe,
    user_id: str = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> StoredRecipe:
    """
    Validate and save a recipe to the caller's collection.

    Args:
        recipe: Recipe with title, servings, ingredients and steps

    Returns:
        StoredRecipe: Saved recipe with its generated id
    """
    return store.save_recipe(user_id, recipe)


@app.get("/recipes", response_model=List[StoredRecipe])
async def list_recipes(
    user_id: str = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> List[StoredRecipe]:
    """Caller's recipes, newest first."""
    recipes = store.list_recipes(user_id)
    logger.info(f"Fetching {len(recipes)} recipes for user {user_id}")
    return recipes


@app.get("/recipes/{recipe_id}", response_model=StoredRecipe)
async def get_recipe(
    recipe_id: str,
    user_id: str = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> StoredRecipe:
    """
    Get one of the caller's recipes.

    Raises:
        NotFoundError: 404 if the recipe does not exist for this user
    """
    recipe = store.get_recipe(recipe_id, user_id=user_id)
    if recipe is None:
        raise NotFoundError("Recipe not found")
    return recipe


# ==================== Profile ====================

@app.put("/profile", response_model=UserProfile)
async def save_profile(
    profile: UserProfile,
    user_id: str = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> UserProfile:
    """Create or replace the caller's health profile."""
    return store.save_profile(user_id, profile)


@app.get("/profile", response_model=UserProfile)
async def get_profile(
    user_id: str = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> UserProfile:
    """
    Get the caller's health profile.

    Raises:
        NotFoundError: 404 if no profile was saved yet
    """
    profile = store.get_profile(user_id)
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


# ==================== Reference data ====================

@app.get("/catalog", response_model=List[NutrientCatalogEntry])
async def get_catalog(store: RecordStore = Depends(get_store)) -> List[NutrientCatalogEntry]:
    """Nutrient catalog entries (per 100 units)."""
    return store.get_catalog().entries()


@app.get("/diseases/{disease}/targets", response_model=DiseaseTargets)
async def get_disease_targets(
    disease: str,
    store: RecordStore = Depends(get_store),
) -> DiseaseTargets:
    """
    Daily nutrient targets for a condition.

    Raises:
        NotFoundError: 404 if the condition is unknown
    """
    targets = store.get_disease_targets(disease)
    if targets is None:
        raise NotFoundError(f"No targets for disease '{disease}'")
    return targets


# ==================== Modification ====================

# Plain def: FastAPI runs it in the threadpool since the reasoning call blocks
@app.post("/modify", response_model=ModificationResult)
def modify_recipe(
    request: ModifyRequest,
    user_id: str = Depends(get_current_user),
    modifier: RecipeModifier = Depends(get_modifier),
) -> ModificationResult:
    """
    Map nutrients, scale, or substitute ingredients of a recipe.

    The recipe is taken from the record store (recipeId) or from the
    request body (recipePayload), and its nutrition is compared against the
    daily targets of the profile's condition.

    Args:
        request: ModifyRequest with operation, userProfile and recipe source

    Returns:
        ModificationResult: Recipe, nutrition, targets, percentages and,
                            for substitute, the suggested substitutions

    Raises:
        RecipeValidationError: 400 for a missing recipe or bad scale factor
        NotFoundError: 404 if recipeId is unknown
        ConfigurationError: 500 if reasoning credentials are missing
        AIServiceUnavailable: 503 if the reasoning service fails
    """
    return modifier.modify(request, user_id)


if __name__ == "__main__":
    import uvicorn

    # Run the application
    # For development only - use uvicorn command in production
    uvicorn.run(
        "recipe_assistant.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )

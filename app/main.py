from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi

from app.routers import analysis
from metacoach import __version__
from metacoach.providers.factory import provider_factory
from metacoach.utils.logging_config import log_manager

log_manager.enable_console()

app = FastAPI(
    title="MetaCoach API",
    description="AI content analysis for Instagram posts: hooks, thumbnails and content quality",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True
)

app.include_router(analysis.router)


def custom_openapi():
    """Generate custom OpenAPI schema."""
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title="MetaCoach API",
        version=__version__,
        description="""
        # MetaCoach content analysis

        - **Video posts**: Whisper transcript, hook score from the opening frames, content quality
        - **Image posts**: thumbnail score and content quality
        - **Carousel albums**: thumbnail score for the lead image

        Each stage is attempted once. A failed video stage fails the request; failed
        image stages are reported in `stage_errors`.
        """,
        routes=app.routes,
        tags=[
            {
                "name": "analysis",
                "description": "Media analysis operations"
            }
        ]
    )

    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi


@app.get("/", tags=["root"])
async def root():
    """Root endpoint providing API information."""
    return {
        "message": "MetaCoach API",
        "version": __version__,
        "description": "AI content analysis for Instagram posts",
        "docs_url": "/docs",
        "redoc_url": "/redoc",
        "openapi_url": "/openapi.json"
    }


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "metacoach"}


@app.get("/providers", tags=["providers"])
async def get_supported_providers():
    """Get information about supported providers."""
    return {
        "supported_providers": provider_factory.get_supported_providers(),
        "message": "These are the currently supported providers for each service type"
    }

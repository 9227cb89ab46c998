"""FastAPI application entry point."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .log import setup_logging
from .api.routes import layouts, boards, games

# Get settings
settings = get_settings()

setup_logging(log_format=settings.log_format, level=settings.log_level)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Solvable Mahjong Solitaire board generation and game sessions",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(layouts.router)
app.include_router(boards.router)
app.include_router(games.router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Mahjong Solitaire Board Service API",
        "endpoints": {
            "layouts": "/api/layouts",
            "tiles": "/api/tiles",
            "generate": "/api/boards/generate",
            "games": "/api/games",
            "select": "/api/games/{game_id}/select",
            "shuffle": "/api/games/{game_id}/shuffle",
            "undo": "/api/games/{game_id}/undo",
            "hint": "/api/games/{game_id}/hint",
            "docs": "/docs",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.app_version,
    }


if __name__ == "__main__":
    import uvicorn

    # Game sessions live in process memory, so a single worker
    uvicorn.run(
        "solitaire.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )

"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from courtside import __version__
from courtside.database import init_db
from courtside.api import api_router
from courtside.api.errors import register_exception_handlers
from courtside.config import get_settings
from courtside.core.limiter import limiter
from courtside.realtime import Broadcaster, build_broadcaster

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# Reduce SQLAlchemy logging noise
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.dialects").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

settings = get_settings()


def create_app(broadcaster: Optional[Broadcaster] = None) -> FastAPI:
    """Build the app. The broadcaster is handed to handlers via get_broadcaster."""
    broadcaster = broadcaster or build_broadcaster(settings)
    
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        logger.info("🏀 Starting Courtside League Backend...")
        await init_db()
        await broadcaster.start()
        
        yield
        
        # Shutdown
        logger.info("🛑 Shutting down...")
        await broadcaster.stop()
    
    app = FastAPI(
        title="Courtside League Backend",
        description="Basketball league management API - teams, players, games and live scores",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.broadcaster = broadcaster
    app.state.limiter = limiter
    
    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    register_exception_handlers(app)
    
    # Include API routes
    app.include_router(api_router, prefix="/api")
    
    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": "Courtside League Backend",
            "version": __version__,
            "docs": "/docs",
            "live": "/api/game",
        }
    
    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}
    
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "courtside.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )

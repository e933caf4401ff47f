from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lazynote.core.config import settings
from lazynote.core.database import init_db
from lazynote.core.logging import configure_logging
from lazynote.routes.auth import router as auth_router
from lazynote.routes.dashboard import router as dashboard_router
from lazynote.routes.document import router as document_router
from lazynote.routes.flashcard import router as flashcard_router
from lazynote.routes.ingestion import router as ingestion_router
from lazynote.routes.quiz import router as quiz_router
from lazynote.routes.quiz_session import router as quiz_session_router
from lazynote.services.ingestion import IngestionRegistry
from lazynote.services.quiz_session import QuizSessionRegistry


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Stop pending progress timers before the loop goes away
    app.state.ingestions.shutdown()


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)
    init_db()

    app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)
    app.state.quiz_sessions = QuizSessionRegistry(
        retention_seconds=settings.SESSION_RETENTION_SECONDS
    )
    app.state.ingestions = IngestionRegistry(
        retention_seconds=settings.INGESTION_RETENTION_SECONDS
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    def read_root():
        return {"message": "LazyNote API is running"}

    app.include_router(auth_router)
    app.include_router(dashboard_router)
    app.include_router(document_router)
    app.include_router(flashcard_router)
    app.include_router(quiz_router)
    app.include_router(quiz_session_router)
    app.include_router(ingestion_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "lazynote.main:app",
        host="127.0.0.1",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )

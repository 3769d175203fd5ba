import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sitegen.api.generate import router as generate_router
from sitegen.api.preview import router as preview_router
from sitegen.config import Settings
from sitegen.core.llm_client import ModelClient
from sitegen.core.materializer import ProjectStore

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, model_client=None) -> FastAPI:
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        Path(settings.projects_dir).mkdir(parents=True, exist_ok=True)
        if settings.project_ttl_seconds > 0:
            app.state.project_store.sweep_expired(settings.project_ttl_seconds)
        yield

    app = FastAPI(title="Sitegen AI Backend", lifespan=lifespan)
    app.state.settings = settings
    app.state.model_client = model_client or ModelClient(settings)
    app.state.project_store = ProjectStore(settings.projects_dir)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS", "DELETE"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
    )

    app.include_router(generate_router)
    app.include_router(preview_router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


def run():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    import uvicorn

    settings = Settings.from_env()
    if settings.debug:
        logging.getLogger("sitegen").setLevel(logging.DEBUG)
    logger.info("Backend server running at http://localhost:%d", settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level="info")


if __name__ == "__main__":
    run()

from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from dualdm import __version__
from dualdm.api.deps import get_engine, get_settings
from dualdm.api.routes import router
from dualdm.db import create_schema
from dualdm.game_store import GameNotFoundError

load_dotenv(override=False)

app = FastAPI(title="dual-dm", version=__version__)
app.include_router(router)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Configure logging
logging.basicConfig(level=get_settings().log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
logger = logging.getLogger(__name__)

# Serve the browser client if present (no build step).
_static_dir = Path(__file__).resolve().parent / "static"
if _static_dir.exists():
    app.mount("/ui", StaticFiles(directory=str(_static_dir), html=True), name="ui")

    @app.get("/")
    async def _root() -> RedirectResponse:
        return RedirectResponse(url="/ui/")


@app.exception_handler(GameNotFoundError)
async def _game_not_found(request: Request, exc: GameNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Game not found"})


@app.exception_handler(SQLAlchemyError)
async def _store_failure(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(exc)})


@app.on_event("startup")
async def _startup() -> None:
    create_schema(get_engine())
    logger.info("Database ready at %s", get_settings().database_url)



@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "dual-dm", "version": __version__}

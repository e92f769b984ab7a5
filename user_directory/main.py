from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from user_directory import deps
from user_directory.logging_config import configure_logging
from user_directory.routers.users import router as users_router
from user_directory.sample_data import load_sample_users
from user_directory.settings import Settings, get_settings
from user_directory.user_store import InMemoryUserStore

_settings = get_settings()
configure_logging(_settings.log_level)

logger = logging.getLogger("user_directory")

APP_VERSION = "1.0.0"


def _resolve(app: FastAPI, dependency):
    # Startup runs outside a request, so honour app.dependency_overrides by hand.
    return app.dependency_overrides.get(dependency, dependency)()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Settings are read at startup, not import, so LOAD_SAMPLE_DATA can be set per run.
    settings = _resolve(app, deps.get_settings_dep)
    if settings.load_sample_data:
        load_sample_users(_resolve(app, deps.get_user_store))
    else:
        logger.info("Sample data disabled (LOAD_SAMPLE_DATA=false)")
    yield


app = FastAPI(title=_settings.app_title, version=APP_VERSION, lifespan=lifespan)
app.include_router(users_router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Missing or ill-typed fields are reported as 400 like any other bad input.
    logger.warning("Invalid request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request", "errors": _jsonable_errors(exc)},
    )


def _jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [{"loc": list(e.get("loc", ())), "msg": str(e.get("msg", ""))} for e in exc.errors()]


@app.get("/healthz")
def healthz(store: InMemoryUserStore = Depends(deps.get_user_store)):
    return JSONResponse(
        {
            "ok": True,
            "service": "user-directory",
            "version": APP_VERSION,
            "users": store.count(),
        }
    )


@app.get("/configz")
def configz(s: Settings = Depends(deps.get_settings_dep)):
    return JSONResponse(
        {
            "app_title": s.app_title,
            "load_sample_data": s.load_sample_data,
            "log_level": s.log_level,
        }
    )

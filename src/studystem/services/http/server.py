from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ...api import ApiFunction, call_api, get_api_functions
from ...data import SupabaseNotInitializedError, SupabaseSessionMissingError
from ...domain import (
    InvalidInput,
    InvalidInterval,
    InvalidReference,
    NotFound,
    PortalError,
    Unauthorized,
    UpstreamUnavailable,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="StudyStem Portal API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_STATUS_BY_ERROR = (
    (Unauthorized, 403),
    (NotFound, 404),
    (InvalidInput, 422),
    (InvalidInterval, 422),
    (InvalidReference, 422),
    (UpstreamUnavailable, 503),
)


class ApiCallRequest(BaseModel):
    arguments: Dict[str, Any] = Field(default_factory=dict)


def _serialize_api_function(api_function: ApiFunction) -> dict:
    return api_function.describe()


def status_for(error: PortalError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


@app.get("/api/functions")
async def list_api_functions() -> JSONResponse:
    functions = [_serialize_api_function(func) for func in get_api_functions()]
    return JSONResponse({"functions": functions})


@app.post("/api/functions/{function_name}")
def invoke_api_function(function_name: str, request: ApiCallRequest) -> JSONResponse:
    try:
        result = call_api(function_name, **request.arguments)
    except KeyError as exc:
        logger.warning("API function not found: %s", function_name)
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except SupabaseSessionMissingError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    except SupabaseNotInitializedError as exc:
        logger.error("Portal backend is not configured: %s", exc)
        raise HTTPException(status_code=503, detail="The portal backend is not configured.") from exc
    except PortalError as exc:
        logger.info("API function %s rejected: %s", function_name, exc.message)
        raise HTTPException(status_code=status_for(exc), detail=exc.message) from exc
    except TypeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    logger.debug("API function %s executed successfully", function_name)
    return JSONResponse({"name": function_name, "result": result})


def run_local_server(host: str = "127.0.0.1", port: int = 8000) -> None:
    import asyncio
    from hypercorn.asyncio import serve
    from hypercorn.config import Config

    config = Config()
    config.bind = [f"{host}:{port}"]
    asyncio.run(serve(app, config))

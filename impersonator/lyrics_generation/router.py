from __future__ import annotations
from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
import logging

from .schemas import ErrorResponse, GenerationRequest, GenerationResponse
from . import engine
from impersonator.providers.client import MissingCredentialsError

router = APIRouter(
    tags=["lyrics-generation"],
)

log = logging.getLogger("impersonator.lyrics_generation")

MISSING_FIELDS_MESSAGE = "Missing authorName or song"


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def _error_message(exc: BaseException) -> str:
    return str(exc) or repr(exc)


@router.post(
    "/generate-lyrics",
    response_model=GenerationResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_lyrics(request: Request):
    # Body is read as untyped JSON whatever the Content-Type; parse errors are 500s
    try:
        body = GenerationRequest.from_payload(await request.json())
        # only authorName/song are required server-side
        if not body.has_required_fields():
            return _error(MISSING_FIELDS_MESSAGE, 400)
        lyrics = await run_in_threadpool(engine.generate_lyrics, body)
    except MissingCredentialsError as e:
        log.error("completion provider not configured: %s", e)
        return _error(str(e), 500)
    except Exception as e:
        log.exception("lyrics generation failed")
        return _error(_error_message(e), 500)
    return GenerationResponse(lyrics=lyrics)

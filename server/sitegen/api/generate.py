# sitegen/api/generate.py
import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from sitegen.core.block_extractor import classify, extract_blocks
from sitegen.core.llm_client import UpstreamUnavailableError
from sitegen.core.prompts import compose_prompt
from sitegen.models import GenerateRequest, GenerateResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/generate", response_model=GenerateResponse)
async def generate(req: GenerateRequest, request: Request):
    """
    prompt -> Gemini -> fenced blocks -> three files on disk.
    Returns the new project id plus the blocks exactly as extracted.
    """
    model_client = request.app.state.model_client
    store = request.app.state.project_store

    system_prompt, user_prompt = compose_prompt(req.prompt)
    try:
        raw = await model_client.generate(system_prompt, user_prompt)
    except UpstreamUnavailableError as e:
        return JSONResponse(status_code=502, content={"detail": str(e), "retryable": e.retryable})

    try:
        extraction = extract_blocks(raw)
        status, warnings = classify(raw, extraction)
        logger.debug("[Gemini Raw]\n%s", raw)
        logger.debug("[Parsed JS]\n%s", extraction.bundle.js)
        for w in warnings:
            logger.warning("generation %s: %s", status.value, w)

        project_id = await run_in_threadpool(store.create, extraction.bundle)
        return GenerateResponse(id=project_id, code=extraction.bundle, status=status, warnings=warnings)
    except Exception as e:
        logger.exception("generate failed")
        raise HTTPException(status_code=500, detail=str(e))

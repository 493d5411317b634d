"""FastAPI application: the HTTP surface the ad editor calls.

Endpoints:
    GET  /health    — Health check (store configuration)
    POST /scrape    — Page metadata + resolved language for a landing page URL
    POST /generate  — Usage-gated passthrough to the Messages API
    POST /ads       — Scrape, prompt, gated generation and parsing in one call
    POST /refine    — Rewrite a single headline/description within its limit
"""

from __future__ import annotations

from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from adcopy.cache import PageCache
from adcopy.config import settings
from adcopy.errors import ConfigurationError, GenerationError
from adcopy.gate import RateGate
from adcopy.gateway import GenerationGateway
from adcopy.models import GatedResult, RefineRequest
from adcopy.pipeline import AcquisitionPipeline
from adcopy.store import CounterStore
from adcopy.writer.client import MessagesClient, first_text_block
from adcopy.writer.parse import AdCopyParseError, parse_ad_copy
from adcopy.writer.prompts import CopyBrief, build_generation_prompt, messages_request
from adcopy.writer.refine import refine_text

app = FastAPI(
    title="adcopy API",
    description="Localized Responsive Search Ad copy from a landing page URL",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


class ScrapeBody(BaseModel):
    url: str | None = None


class AdsBody(BaseModel):
    url: str | None = None
    brief: CopyBrief = CopyBrief()


# ── Dependencies (overridden in tests) ──────────────────────────────────────

def get_store() -> CounterStore:
    return CounterStore()


def get_pipeline(store: CounterStore = Depends(get_store)) -> AcquisitionPipeline:
    return AcquisitionPipeline(cache=PageCache(store))


def get_messages_client() -> MessagesClient:
    return MessagesClient()


def get_gateway(
    store: CounterStore = Depends(get_store),
    client: MessagesClient = Depends(get_messages_client),
) -> GenerationGateway:
    return GenerationGateway(gate=RateGate(store), client=client)


def client_identity(request: Request) -> str:
    """First X-Forwarded-For hop (set by the hosting proxy), else the peer address."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip() or "unknown"
    return request.client.host if request.client else "unknown"


# ── Error mapping ───────────────────────────────────────────────────────────

@app.exception_handler(GenerationError)
async def generation_error_handler(request: Request, exc: GenerationError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.body)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc)})


# ── Routes ──────────────────────────────────────────────────────────────────

@app.get("/health")
async def health(store: CounterStore = Depends(get_store)):
    return {"status": "ok", "store": store.configured}


@app.post("/scrape")
async def scrape(body: ScrapeBody, pipeline: AcquisitionPipeline = Depends(get_pipeline)):
    if not body.url:
        return JSONResponse(status_code=400, content={"error": "URL is required"})
    page = await pipeline.acquire(body.url)
    return page.to_wire()


@app.post("/generate")
async def generate(
    body: dict[str, Any],
    request: Request,
    gateway: GenerationGateway = Depends(get_gateway),
):
    if not gateway.client.configured:
        raise ConfigurationError("API key not configured")
    result = await gateway.generate(client_identity(request), body)
    if isinstance(result, GatedResult):
        return result.model_dump()
    return result.to_wire()


@app.post("/ads")
async def ads(
    body: AdsBody,
    request: Request,
    pipeline: AcquisitionPipeline = Depends(get_pipeline),
    gateway: GenerationGateway = Depends(get_gateway),
):
    if not body.url:
        return JSONResponse(status_code=400, content={"error": "URL is required"})
    if not gateway.client.configured:
        raise ConfigurationError("API key not configured")

    page = await pipeline.acquire(body.url)
    prompt = build_generation_prompt(body.url, page, body.brief)
    result = await gateway.generate(client_identity(request), messages_request(prompt, 2000))
    if isinstance(result, GatedResult):
        return result.model_dump()

    try:
        copy = parse_ad_copy(first_text_block(result.payload) or "")
    except AdCopyParseError as e:
        # Quota was already consumed: the generation itself succeeded
        return JSONResponse(
            status_code=502,
            content={"error": str(e), "usage_count": result.usage_count, "usage_limit": result.usage_limit},
        )

    return {
        "page": page.to_wire(),
        "ad": copy.model_dump(by_alias=True),
        "usage_count": result.usage_count,
        "usage_limit": result.usage_limit,
        "gated": False,
    }


@app.post("/refine")
async def refine(body: dict[str, Any], client: MessagesClient = Depends(get_messages_client)):
    if not body.get("current") or not body.get("instruction"):
        return JSONResponse(status_code=400, content={"error": "Missing fields"})
    if not client.configured:
        raise ConfigurationError("API key not configured")
    try:
        req = RefineRequest.model_validate(body)
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": f"Invalid fields: {e.error_count()} error(s)"})
    refined = await refine_text(req, client)
    return {"refined": refined}

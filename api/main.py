"""FastAPI REST API for code-compressor."""

from __future__ import annotations

import hashlib
import json
import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

import redis.asyncio as aioredis
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from redis.exceptions import RedisError

from code_compressor import (
    CompressionResult,
    FormatKind,
    compress_with_stats,
    decompress,
    estimate_tokens,
    get_sample,
)

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


# ---------------------------------------------------------------------------
# Redis Cache
# ---------------------------------------------------------------------------

redis_client: aioredis.Redis | None = None

# Cache TTL in seconds (default: 1 hour)
CACHE_TTL = int(os.getenv("CACHE_TTL", "3600"))

# Redis connection URL
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379")


def _generate_cache_key(prefix: str, data: dict) -> str:
    """Generate a cache key from request data."""
    # Sort dict keys for consistent hashing
    sorted_data = json.dumps(data, sort_keys=True)
    hash_value = hashlib.sha256(sorted_data.encode()).hexdigest()[:16]
    return f"{prefix}:{hash_value}"


# ---------------------------------------------------------------------------
# Request / Response models
# ---------------------------------------------------------------------------


class CodeRequest(BaseModel):
    """Request body for the compress and decompress endpoints."""

    text: str = Field(..., description="Code to transform")
    format: FormatKind = Field(
        default=FormatKind.TYPESCRIPT, description="Format of the code (typescript, html, css, json)"
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "text": ".a {\n  color: red;\n}\n",
                "format": "css",
            }
        ]
    }}


class StatsResponse(BaseModel):
    """Token savings of one compression."""

    original_tokens: int = Field(..., description="Estimated tokens before compression")
    compressed_tokens: int = Field(..., description="Estimated tokens after compression")
    saved_tokens: int = Field(..., description="Tokens saved (negative if the text grew)")
    saved_percentage: float = Field(..., description="Percentage of tokens saved")


class CompressResponse(BaseModel):
    """Response body for the /compress endpoint."""

    text: str = Field(..., description="Compressed code")
    format: FormatKind
    stats: StatsResponse


class DecompressResponse(BaseModel):
    """Response body for the /decompress endpoint."""

    text: str = Field(..., description="Re-indented code")
    format: FormatKind


class BatchItem(BaseModel):
    """A single item in a batch compression request."""

    id: str = Field(..., description="Unique identifier for this item")
    text: str = Field(..., description="Code to compress")


class BatchRequest(BaseModel):
    """Request body for batch compression."""

    items: list[BatchItem] = Field(..., description="List of code snippets to compress")
    format: FormatKind = Field(default=FormatKind.TYPESCRIPT)


class BatchItemResponse(BaseModel):
    """A single result in a batch compression response."""

    id: str
    text: str
    stats: StatsResponse


class BatchResponse(BaseModel):
    """Response body for batch compression."""

    items: list[BatchItemResponse]
    total_original_tokens: int
    total_compressed_tokens: int
    overall_saved_percentage: float


class TokensRequest(BaseModel):
    """Request body for token estimation."""

    text: str = Field(..., description="Text to measure")


class TokensResponse(BaseModel):
    """Response body for token estimation."""

    tokens: int = Field(..., description="Estimated token count (characters / 4, rounded up)")


class ExampleResponse(BaseModel):
    """Response body for the sample document endpoint."""

    format: FormatKind
    text: str


class HealthResponse(BaseModel):
    """Response body for health check."""

    status: str = "ok"
    version: str
    cache_enabled: bool = False
    redis_connected: bool = False


class CacheStatsResponse(BaseModel):
    """Response body for cache statistics."""

    enabled: bool
    connected: bool
    ttl_seconds: int
    redis_url: str
    keys_count: int | None = None
    memory_used: str | None = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _result_to_response(result: CompressionResult) -> CompressResponse:
    """Convert a CompressionResult to the API response model."""
    stats = result.stats
    return CompressResponse(
        text=result.text,
        format=result.format,
        stats=StatsResponse(
            original_tokens=stats.original_tokens,
            compressed_tokens=stats.compressed_tokens,
            saved_tokens=stats.saved_tokens,
            saved_percentage=stats.saved_percentage,
        ),
    )


def _require_text(text: str, action: str) -> None:
    if not text.strip():
        raise ValueError(f"Nothing to {action}: text is empty")


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan - setup Redis connection."""
    global redis_client
    try:
        redis_client = aioredis.from_url(
            REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
        )
        await redis_client.ping()
        logger.info("Connected to Redis at %s", REDIS_URL)
    except (RedisError, ValueError) as e:
        logger.warning("Redis unavailable: %s. Caching disabled.", e)
        redis_client = None

    yield

    if redis_client:
        await redis_client.aclose()


app = FastAPI(
    title="Code Compressor API",
    description=(
        "REST API for compressing TypeScript, HTML, CSS and JSON by stripping "
        "comments and redundant whitespace, and for re-indenting compressed code. "
        "Compression responses report the estimated token savings."
    ),
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check() -> HealthResponse:
    """Check API health, version, and cache status."""
    redis_connected = False
    if redis_client:
        try:
            await redis_client.ping()
            redis_connected = True
        except RedisError as e:
            logger.warning("Redis ping failed: %s", e)

    return HealthResponse(
        status="ok",
        version=VERSION,
        cache_enabled=redis_client is not None,
        redis_connected=redis_connected,
    )


@app.get("/cache/stats", response_model=CacheStatsResponse, tags=["Cache"])
async def cache_stats() -> CacheStatsResponse:
    """Get cache statistics and Redis connection info."""
    keys_count = None
    memory_used = None
    connected = False

    if redis_client:
        try:
            await redis_client.ping()
            connected = True
            # Get number of keys matching our patterns
            keys_count = 0
            for pattern in ["compress:*", "decompress:*"]:
                keys_count += len(await redis_client.keys(pattern))

            info = await redis_client.info("memory")
            memory_used = info.get("used_memory_human", "unknown")
        except RedisError as e:
            logger.warning("Could not read cache stats: %s", e)

    return CacheStatsResponse(
        enabled=redis_client is not None,
        connected=connected,
        ttl_seconds=CACHE_TTL,
        redis_url=REDIS_URL.split("@")[-1] if "@" in REDIS_URL else REDIS_URL,
        keys_count=keys_count,
        memory_used=memory_used,
    )


@app.post("/compress", response_model=CompressResponse, tags=["Compression"])
async def compress_code(req: CodeRequest) -> CompressResponse:
    """Strip comments and redundant whitespace from code.

    JSON that does not parse is returned unchanged. Results are cached in
    Redis when it is available.
    """
    try:
        _require_text(req.text, "compress")

        cache_key = _generate_cache_key("compress", req.model_dump(mode="json"))
        if redis_client:
            cached = await redis_client.get(cache_key)
            if cached:
                return CompressResponse.model_validate_json(cached)

        response = _result_to_response(compress_with_stats(req.text, req.format))

        if redis_client:
            await redis_client.setex(cache_key, CACHE_TTL, response.model_dump_json())

        return response
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@app.post("/decompress", response_model=DecompressResponse, tags=["Compression"])
async def decompress_code(req: CodeRequest) -> DecompressResponse:
    """Re-indent compressed code into a readable layout.

    The layout is reconstructed from brace and tag balance; it is not the
    original formatting.
    """
    try:
        _require_text(req.text, "decompress")

        cache_key = _generate_cache_key("decompress", req.model_dump(mode="json"))
        if redis_client:
            cached = await redis_client.get(cache_key)
            if cached:
                return DecompressResponse(text=cached, format=req.format)

        result = decompress(req.text, req.format)

        if redis_client:
            await redis_client.setex(cache_key, CACHE_TTL, result)

        return DecompressResponse(text=result, format=req.format)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@app.post("/compress/batch", response_model=BatchResponse, tags=["Compression"])
async def compress_batch(req: BatchRequest) -> BatchResponse:
    """Compress multiple snippets of the same format in a single request.

    Returns per-item results and aggregate token savings.
    """
    items: list[BatchItemResponse] = []
    total_orig = 0
    total_comp = 0

    for item in req.items:
        response = _result_to_response(compress_with_stats(item.text, req.format))
        items.append(BatchItemResponse(id=item.id, text=response.text, stats=response.stats))
        total_orig += response.stats.original_tokens
        total_comp += response.stats.compressed_tokens

    overall = (total_orig - total_comp) / total_orig * 100 if total_orig > 0 else 0.0
    return BatchResponse(
        items=items,
        total_original_tokens=total_orig,
        total_compressed_tokens=total_comp,
        overall_saved_percentage=overall,
    )


@app.post("/tokens", response_model=TokensResponse, tags=["Statistics"])
async def count_tokens(req: TokensRequest) -> TokensResponse:
    """Estimate the token count of a text."""
    return TokensResponse(tokens=estimate_tokens(req.text))


@app.get("/examples/{fmt}", response_model=ExampleResponse, tags=["Examples"])
async def example(fmt: FormatKind) -> ExampleResponse:
    """Return a sample document for a format."""
    return ExampleResponse(format=fmt, text=get_sample(fmt))

"""
Lifespan FastAPI: branche le rate limiter du checkout sur Redis.
Interrupteurs:
  - DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS=1: pas d'init (tests sans Redis)
  - RATE_LIMIT_REDIS_URL: backend Redis (redis://127.0.0.1:6379/0 par défaut)
  - LOCAL_RATE_LIMIT_FALLBACK=1: compteur en mémoire si Redis est injoignable
"""
import os
import logging
from contextlib import asynccontextmanager

import redis.asyncio as aioredis
from fastapi import FastAPI
from fastapi_limiter import FastAPILimiter

logger = logging.getLogger("uvicorn.error")

DEFAULT_REDIS_URL = "redis://127.0.0.1:6379/0"


async def init_rate_limiter(app: FastAPI) -> bool:
    """Retourne l'état effectif du rate limiting (aussi posé sur app.state)."""
    if os.getenv("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS") == "1":
        logger.info("Checkout rate limiting disabled for tests")
        app.state.rate_limit_enabled = False
        return False

    redis_url = os.getenv("RATE_LIMIT_REDIS_URL", DEFAULT_REDIS_URL)
    try:
        await FastAPILimiter.init(aioredis.from_url(redis_url, encoding="utf-8", decode_responses=True))
        enabled = True
        logger.info("Checkout rate limiting backed by Redis")
    except Exception as e:
        # Fallback mémoire (opt-in) sinon désactivé: le checkout reste disponible
        enabled = os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1"
        logger.warning("Redis rate limiter unavailable (%s), in-memory fallback=%s", e, enabled)
    app.state.rate_limit_enabled = enabled
    return enabled

@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_rate_limiter(app)
    yield

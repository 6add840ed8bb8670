import logging

from fastapi import APIRouter, HTTPException

from txvault.domain.envelope.codec import parse_master_key_hex
from txvault.domain.envelope.errors import InvalidKeyMaterial
from txvault.settings import settings

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health/live")
async def liveness():
    """Liveness probe: Service is running."""
    return {"status": "ok", "checks": {"api": "ok"}}


@router.get("/health/ready")
async def readiness():
    """Readiness probe: a usable master key is configured."""
    health = {"status": "ok", "checks": {}}

    try:
        parse_master_key_hex(settings.MASTER_KEY_HEX)
        health["checks"]["master_key"] = "ok"
    except InvalidKeyMaterial:
        logger.error("Health check failed (master_key)")
        health["checks"]["master_key"] = "failed"
        health["status"] = "failed"

    if health["status"] == "failed":
        raise HTTPException(status_code=503, detail=health)

    return health

"""Transaction Vault - Main Application."""
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from txvault.api.tx import router as tx_router
from txvault.logging_hardening import setup_logging_redaction
from txvault.routers import health
from txvault.settings import settings

logger = logging.getLogger(__name__)

# Initialize logging redaction filters early
setup_logging_redaction()

app = FastAPI(
    title="Transaction Vault",
    description="Envelope-encrypted transaction records (AES-256-GCM)",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HTTPException)
async def vault_http_exception_handler(request: Request, exc: HTTPException):
    # Standardized errors are returned with a top-level 'error' key
    if isinstance(exc.detail, dict) and "error" in exc.detail:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.detail,
            headers=exc.headers
        )

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers
    )


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError):
    # Do not echo the submitted body: it may carry the plaintext payload
    return JSONResponse(
        status_code=400,
        content={"error": {
            "code": "INVALID_BODY",
            "message": "Invalid body. Expected { partyId: string, payload: unknown }",
        }},
    )


@app.get("/")
async def root():
    return {"status": "api running"}


# Mount routers
app.include_router(tx_router.router, prefix="/tx", tags=["Transactions"])
app.include_router(health.router, tags=["Health"])

"""
Main Application Entry Point
----------------------------
FastAPI app for the Claim Adjudication Engine.

Handles:
 - Claim submission: fraud scoring, disposition and payout directive
 - Legacy transfer acknowledgement
 - Health and system info endpoints
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from datetime import datetime
import traceback
import json

# =========================================================
# 📦 Internal Imports
# =========================================================
from claim_adjudicator import __version__
from claim_adjudicator.utils.logger import logger
from claim_adjudicator.utils.logging_middleware import LoggingMiddleware
from claim_adjudicator.config import config
from claim_adjudicator.api.endpoints import claims, legacy

# =========================================================
# 🚀 FastAPI Initialization
# =========================================================
app = FastAPI(
    title="Claim Adjudication Engine",
    version=__version__,
    description="Fraud risk aggregation and claim adjudication API.",
)

# =========================================================
# 🌐 Middleware
# =========================================================
app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =========================================================
# 🔌 Include Routers
# =========================================================
app.include_router(claims.router)
app.include_router(legacy.router)

# =========================================================
# ⚙️ Exception Handlers
# =========================================================
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Bad field shapes are caller errors (400); an unparseable body is an internal failure (500)."""
    errors = exc.errors()
    malformed_json = any(err.get("type") == "json_invalid" for err in errors)
    status_code = 500 if malformed_json else 400

    log_data = {
        "event": "request_error",
        "type": "ValidationError",
        "status": status_code,
        "path": str(request.url.path),
        "errors": [{"type": err.get("type"), "loc": err.get("loc")} for err in errors],
    }
    logger.error(json.dumps(log_data, default=str))

    message = "Internal server error" if malformed_json else "Invalid input"
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all for unexpected runtime exceptions."""
    log_data = {
        "event": "request_error",
        "type": type(exc).__name__,
        "status": 500,
        "path": str(request.url.path),
        "trace": traceback.format_exc(),
    }
    logger.error(json.dumps(log_data))

    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal server error"},
    )


# =========================================================
# 🧩 Utility Endpoints
# =========================================================
@app.get("/")
async def root():
    """Root endpoint for system information."""
    return {
        "status": "running",
        "version": __version__,
        "timestamp": datetime.utcnow().isoformat(),
        "message": "Claim Adjudication Engine",
        "environment": config.ENV,
        "risk_service_enabled": config.is_risk_service_enabled,
    }


@app.get("/health")
async def health():
    """Basic health check."""
    return {"status": "healthy"}


@app.on_event("startup")
async def log_startup():
    """Logs configuration and routes when app starts."""
    logger.info(f"🔧 Active configuration: {json.dumps(config.summary())}")
    logger.info("🚦 Registered Routes:")
    for route in app.routes:
        logger.info(f"  • {route.path}")


# =========================================================
# 🏁 Runner
# =========================================================
def run_api():
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    logger.info("🚀 Starting Claim Adjudication Engine")
    uvicorn.run(
        "claim_adjudicator.main:app",
        host=config.API_HOST,
        port=config.API_PORT,
        reload=config.DEBUG and config.ENV == "local",
    )


if __name__ == "__main__":
    run_api()

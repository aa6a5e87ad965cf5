"""
Request/Response Logging Middleware
-----------------------------------
Emits one `request_start` and one `request_end` (or `request_error`) JSON event
per API call, tagged with a trace id that is echoed back as `X-Request-ID`.

Health and docs routes are not logged. Query parameters naming addresses,
policies or credentials are masked.
"""

import time
import json
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from claim_adjudicator.utils.logger import logger
from claim_adjudicator.config import config

SKIP_PATHS = ("/health", "/docs", "/redoc", "/openapi.json", "/favicon.ico")
SENSITIVE_PARAM_MARKERS = ("address", "policy", "token", "key", "secret")
TRACE_HEADER = "X-Request-ID"


def mask_params(params: dict) -> dict:
    return {
        key: "[REDACTED]" if any(marker in key.lower() for marker in SENSITIVE_PARAM_MARKERS) else value
        for key, value in params.items()
    }


class LoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, redact_params: bool = True):
        super().__init__(app)
        self.redact_params = redact_params

    @staticmethod
    def _emit(log, trace_id: str, event: str, request: Request, **fields):
        payload = {
            "trace_id": trace_id,
            "event": event,
            "timestamp": time.time(),
            "method": request.method,
            "path": request.url.path,
            **fields,
        }
        log(json.dumps(payload, default=str), extra={"trace_id": trace_id})

    async def dispatch(self, request: Request, call_next):
        if request.url.path.startswith(SKIP_PATHS):
            return await call_next(request)

        started = time.perf_counter()
        trace_id = request.headers.get(TRACE_HEADER) or str(uuid.uuid4())
        params = dict(request.query_params)

        self._emit(
            logger.info, trace_id, "request_start", request,
            client_ip=request.client.host if request.client else "unknown",
            params=mask_params(params) if self.redact_params else params,
            content_length=int(request.headers.get("content-length", 0) or 0),
        )

        try:
            response: Response = await call_next(request)
        except Exception as e:
            self._emit(
                logger.error, trace_id, "request_error", request,
                error_type=type(e).__name__,
                latency_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise

        self._emit(
            logger.info, trace_id, "request_end", request,
            status_code=response.status_code,
            latency_ms=round((time.perf_counter() - started) * 1000, 2),
            **({"response_headers": dict(response.headers)} if config.DEBUG else {}),
        )
        response.headers[TRACE_HEADER] = trace_id
        return response

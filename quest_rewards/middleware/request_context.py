"""Per-request bookkeeping: request ID, processing time and the access log line."""

import logging
import time
import uuid
from contextvars import ContextVar
from typing import Callable
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from quest_rewards.utils.config_loader import CONFIG

logger = logging.getLogger("quest_rewards.requests")

request_id_var: ContextVar[str] = ContextVar('request_id', default='')


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with an ID and logs it.

    The caller's X-Request-ID is reused when present so a receipt preview
    can be traced back to the tracker request that asked for it. Responses
    carry the ID, the processing time and the policy version of the
    balance config that priced them.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request_id_var.set(request_id)
        request.state.request_id = request_id

        logger.info("[%s] %s %s", request_id, request.method, request.url.path)
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error("[%s] Error: %s", request_id, e)
            raise
        process_time = time.perf_counter() - start_time

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(round(process_time, 4))
        response.headers["X-Policy-Version"] = str(CONFIG.get("policy_version", "unknown"))
        logger.info("[%s] %s in %.4fs", request_id, response.status_code, process_time)
        return response

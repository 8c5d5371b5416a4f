"""
Webhook Auth Middleware
=======================
Runs the webhook gate in front of n8n callback routes.

Usage:
    from ingest_core.middleware import protect_webhooks

    app = FastAPI()
    protect_webhooks(app)  # Uses N8N_WEBHOOK_SECRET / APP_ENV

    # Or per router:
    router = APIRouter(dependencies=[Depends(require_webhook_auth(gate))])
"""

from typing import Awaitable, Callable, Optional

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
import structlog

from ingest_core.errors import WebhookAuthError, install_error_handlers, rejection_response
from ingest_core.webhook_auth import WebhookAuthConfig, WebhookGate, WebhookRequest

logger = structlog.get_logger(__name__)

DEFAULT_WEBHOOK_PREFIX = "/api/webhooks"


async def _authorize(gate: WebhookGate, request: Request):
    # Raw bytes, not re-serialized JSON: the signature covers the exact body
    body = await request.body()
    return gate.authorize(WebhookRequest(headers=request.headers, body=body))


class WebhookAuthMiddleware(BaseHTTPMiddleware):
    """
    Middleware that authenticates every request under a webhook path prefix.

    Rejected requests get a JSON error body; accepted requests continue to
    the route handler with the body still readable.
    """

    def __init__(
        self,
        app,
        gate: Optional[WebhookGate] = None,
        path_prefix: str = DEFAULT_WEBHOOK_PREFIX,
    ):
        super().__init__(app)
        self.gate = gate or WebhookGate()
        self.path_prefix = path_prefix.rstrip("/")

    def _is_webhook_path(self, path: str) -> bool:
        return path == self.path_prefix or path.startswith(self.path_prefix + "/")

    async def dispatch(self, request: Request, call_next) -> Response:
        if not self._is_webhook_path(request.url.path):
            return await call_next(request)

        result = await _authorize(self.gate, request)
        if not result.accepted:
            return rejection_response(result)

        return await call_next(request)


def require_webhook_auth(gate: WebhookGate) -> Callable[[Request], Awaitable[None]]:
    """
    Build a FastAPI dependency that authenticates webhook requests.

    Raises WebhookAuthError on rejection; pair with install_error_handlers.
    """

    async def dependency(request: Request) -> None:
        result = await _authorize(gate, request)
        if not result.accepted:
            raise WebhookAuthError(result)

    return dependency


def protect_webhooks(
    app: FastAPI,
    config: Optional[WebhookAuthConfig] = None,
    path_prefix: str = DEFAULT_WEBHOOK_PREFIX,
) -> WebhookGate:
    """
    Install webhook authentication on an app.

    Args:
        app: FastAPI application instance
        config: Gate configuration (defaults to environment variables)
        path_prefix: Routes under this prefix are authenticated

    Returns:
        The gate, for reuse in router-level dependencies
    """
    gate = WebhookGate(config or WebhookAuthConfig.from_env())

    install_error_handlers(app)
    app.add_middleware(WebhookAuthMiddleware, gate=gate, path_prefix=path_prefix)

    logger.info(
        "webhook_auth_configured",
        path_prefix=path_prefix,
        environment=gate.config.environment,
        secret_configured=gate.config.has_secret,
    )
    return gate

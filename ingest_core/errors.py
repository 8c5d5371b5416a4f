"""
Webhook Error Responses
=======================
Turns gate rejections into JSON responses.

Rejection bodies carry a human-readable ``error`` and a machine-readable
``code``; they never echo the secret or the expected signature.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ingest_core.webhook_auth import VerificationResult


class WebhookAuthError(Exception):
    """Raised at the HTTP seam when the gate rejects a request."""

    def __init__(self, result: VerificationResult):
        self.result = result
        self.status_code = result.status_code
        super().__init__(f"[{result.reason.value}] {result.message} (Status: {result.status_code})")


def rejection_response(result: VerificationResult) -> JSONResponse:
    """Build the JSON response for a rejected webhook."""
    return JSONResponse(
        status_code=result.status_code,
        content=result.to_response_body(),
    )


async def webhook_auth_error_handler(request: Request, exc: WebhookAuthError) -> JSONResponse:
    return rejection_response(exc.result)


def install_error_handlers(app: FastAPI) -> None:
    """Register the WebhookAuthError handler on a FastAPI app."""
    app.add_exception_handler(WebhookAuthError, webhook_auth_error_handler)

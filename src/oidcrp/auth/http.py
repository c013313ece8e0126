"""Outbound HTTP for identity provider calls.

All provider requests go through :func:`request_json`, which classifies the
response before any payload is handed back:

- 4xx: ``ClientRequestError`` (our request or configuration is wrong)
- any other non-2xx, or no response at all: ``ProviderIntegrationError``
- 2xx with a body that is not valid JSON: ``ContractViolationError``

Schema validation of the decoded payload is the caller's job.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .contracts import ClientRequestError, ContractViolationError, ProviderIntegrationError

logger = logging.getLogger(__name__)


def create_http_client() -> httpx.AsyncClient:
    """Create the async client used for a single provider request.

    Timeouts belong to the transport: 30s to connect, 300s to read.
    """
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=httpx.Timeout(30.0, read=300.0),
    )


def _response_detail(resp: Any) -> Any:
    try:
        return resp.json()
    except Exception:
        return getattr(resp, "text", None)


async def request_json(
    method: str,
    url: str,
    *,
    endpoint: str,
    provider: str = "oidc",
    headers: dict[str, str] | None = None,
    data: dict[str, str] | None = None,
) -> Any:
    """Send a request to an identity provider and return the decoded JSON body."""
    request_headers = {"Accept": "application/json"}
    if headers:
        request_headers.update(headers)

    async with create_http_client() as client:
        try:
            if method == "GET":
                resp = await client.get(url, headers=request_headers)
            else:
                resp = await client.post(url, data=data, headers=request_headers)
        except httpx.RequestError as exc:
            logger.warning(
                "OIDC %s endpoint request failed",
                endpoint,
                extra={
                    "provider": provider,
                    "endpoint": endpoint,
                    "error_type": exc.__class__.__name__,
                },
            )
            raise ProviderIntegrationError(
                "temporarily_unavailable",
                f"OIDC {endpoint} request failed",
                status_code=503,
            ) from exc

    status_code = resp.status_code
    if not 200 <= status_code < 300:
        detail = _response_detail(resp)
        logger.warning(
            "OIDC %s endpoint returned %s",
            endpoint,
            status_code,
            extra={
                "provider": provider,
                "endpoint": endpoint,
                "status_code": status_code,
            },
        )
        if 400 <= status_code < 500:
            raise ClientRequestError(
                "invalid_request",
                f"OIDC {endpoint} request was rejected",
                status_code=status_code,
                detail=detail,
            )
        raise ProviderIntegrationError(
            "server_error",
            f"OIDC {endpoint} request failed",
            status_code=status_code,
            detail=detail,
        )

    try:
        return resp.json()
    except Exception as exc:
        logger.warning(
            "OIDC %s endpoint returned invalid JSON",
            endpoint,
            extra={
                "provider": provider,
                "endpoint": endpoint,
                "status_code": status_code,
            },
        )
        raise ContractViolationError(
            "invalid_response",
            f"OIDC {endpoint} response was not valid JSON",
            status_code=502,
            detail=getattr(resp, "text", None),
        ) from exc

"""
Gateway RPC client.

Every request is a JSON POST to ``{url}/rpc``:

    {"method": "node.invoke", "params": {...}, "timeoutMs": 10000}

The gateway answers ``{"ok": true, "result": ...}`` or
``{"ok": false, "error": {"message": "..."}}``.
"""

import uuid
from typing import Any, Callable

import httpx

from nodegate.config import GatewaySettings
from nodegate.errors import GatewayError
from nodegate.logger import get_logger

logger = get_logger(__name__)

# (method, params) -> result
GatewayCall = Callable[[str, dict[str, Any]], Any]


def random_idempotency_key() -> str:
    """Fresh opaque key the gateway uses to deduplicate retried deliveries."""
    return str(uuid.uuid4())


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if isinstance(error, str) and error:
        return error
    return f"HTTP {response.status_code}"


class GatewayClient:
    """Synchronous request/response client for the gateway."""

    def __init__(
        self,
        settings: GatewaySettings,
        transport: httpx.BaseTransport | None = None,
    ):
        self.settings = settings
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.settings.token:
            headers["Authorization"] = f"Bearer {self.settings.token}"
        return headers

    def call(
        self,
        method: str,
        params: dict[str, Any] | None = None,
        timeout_ms: int | None = None,
    ) -> Any:
        """
        Perform one RPC and return its ``result``.

        Args:
            method: Gateway method name (e.g. "node.list").
            params: Method parameters.
            timeout_ms: Per-call override of the configured timeout.

        Raises:
            GatewayError: On connection failure, timeout, non-2xx status,
                or an ``ok: false`` response.
        """
        timeout_ms = timeout_ms or self.settings.timeout_ms
        url = f"{self.settings.url}/rpc"
        body = {"method": method, "params": params or {}, "timeoutMs": timeout_ms}

        logger.debug(f"Gateway call {method} -> {url} (timeout {timeout_ms}ms)")
        try:
            with httpx.Client(
                timeout=timeout_ms / 1000.0, transport=self._transport
            ) as client:
                resp = client.post(url, json=body, headers=self._headers())
                resp.raise_for_status()
                data = resp.json()
        except httpx.ConnectError:
            raise GatewayError(
                method, f"cannot connect to gateway at {self.settings.url}"
            ) from None
        except httpx.TimeoutException:
            raise GatewayError(method, f"timed out after {timeout_ms}ms") from None
        except httpx.HTTPStatusError as e:
            raise GatewayError(
                method, _error_detail(e.response), status_code=e.response.status_code
            ) from None
        except httpx.TransportError as e:
            raise GatewayError(method, str(e) or type(e).__name__) from None
        except ValueError as e:
            raise GatewayError(method, f"invalid JSON response: {e}") from None

        if not isinstance(data, dict):
            raise GatewayError(method, "unexpected response shape")
        if data.get("ok") is False:
            error = data.get("error")
            message = error.get("message") if isinstance(error, dict) else error
            raise GatewayError(method, str(message or "unknown error"))

        return data.get("result")

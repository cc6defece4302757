import logging
import time
from typing import Any, Callable, Dict, Optional, Type, TypeVar

import anyio
import httpx
from pydantic import BaseModel

from .config import PlankaConfig, load_env_config, validate_config
from .errors import (
    PlankaAuthError,
    PlankaNetworkError,
    error_from_response,
)
from .models import AuthResponse, parse_response
from .observability import log_event

T = TypeVar("T", bound=BaseModel)

REQUEST_TIMEOUT_SECONDS = 30.0
# PLANKA issues tokens valid for 30 minutes; refresh 5 minutes early.
# Re-tune if the server's token lifetime changes.
TOKEN_TTL_SECONDS = 25 * 60

ACCESS_TOKENS_PATH = "/api/access-tokens"


class PlankaClient:
    """
    Async HTTP client for the PLANKA REST API.
    - Resolves configuration once, on first use
    - Acquires a bearer token lazily and refreshes it before expiry
    - Retries a request exactly once after a 401, with a fresh token
    - Raises typed PlankaError subclasses; never returns None in place of an error
    """

    def __init__(
        self,
        config: Optional[PlankaConfig] = None,
        *,
        timeout_seconds: float = REQUEST_TIMEOUT_SECONDS,
        token_ttl_seconds: float = TOKEN_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        config_loader: Callable[[], PlankaConfig] = load_env_config,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self._raw_config = config
        self._config: Optional[PlankaConfig] = None
        self._config_loader = config_loader
        self.timeout_seconds = timeout_seconds
        self.token_ttl_seconds = token_ttl_seconds
        self._clock = clock
        self.log = logger or logging.getLogger("planka_mcp.client")

        # Single mutable slot shared by every caller of this client. Concurrent
        # refreshes are not coordinated; the worst case is one extra login.
        self._token: Optional[str] = None
        self._token_expires_at: float = 0.0

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            headers={"Accept": "application/json"},
            timeout=timeout_seconds,
        )

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "PlankaClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # --- Configuration ----------------------------------------------------- #

    @property
    def config(self) -> PlankaConfig:
        if self._config is None:
            if self._raw_config is not None:
                self._config = validate_config(self._raw_config)
            else:
                self._config = self._config_loader()
        return self._config

    @property
    def base_url(self) -> str:
        return self.config.base_url

    # --- Token lifecycle --------------------------------------------------- #

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def token_expires_at(self) -> float:
        return self._token_expires_at

    def clear_token(self) -> None:
        self._token = None
        self._token_expires_at = 0.0

    async def authenticate(self) -> str:
        """Exchange the service-account credentials for a fresh token."""
        config = self.config
        context = f"POST {ACCESS_TOKENS_PATH}"

        try:
            with anyio.fail_after(self.timeout_seconds):
                resp = await self.http.post(
                    f"{config.base_url}{ACCESS_TOKENS_PATH}",
                    json={
                        "emailOrUsername": config.username,
                        "password": config.password,
                    },
                )
        except (httpx.TimeoutException, TimeoutError) as exc:
            raise PlankaNetworkError(
                f"Request timeout connecting to PLANKA at {config.base_url}",
                timeout=True,
                context=context,
            ) from exc
        except httpx.RequestError as exc:
            raise PlankaNetworkError(
                f"Failed to connect to PLANKA at {config.base_url}: {exc}",
                context=context,
            ) from exc

        if not resp.is_success:
            raise PlankaAuthError(
                f"Authentication failed: {resp.status_code} {resp.reason_phrase}",
                status=resp.status_code,
                body=self._safe_json(resp),
                context=context,
            )

        parsed = parse_response(AuthResponse, self._safe_json(resp), context)
        self._token = parsed.item
        self._token_expires_at = self._clock() + self.token_ttl_seconds

        log_event(
            "auth.token_acquired",
            path=ACCESS_TOKENS_PATH,
            status=resp.status_code,
        )
        return self._token

    async def get_token(self) -> str:
        """Return the cached token while it is valid, otherwise authenticate."""
        if not self._token or self._clock() >= self._token_expires_at:
            return await self.authenticate()
        return self._token

    # --- Requests ---------------------------------------------------------- #

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        tool: Optional[str] = None,
        _is_retry: bool = False,
    ) -> Any:
        """
        Core request method.
        - Returns parsed JSON on success, None on 204
        - On 401 with a cached token, clears it and retries once
        - Raises PlankaNetworkError when no response was received
        - Raises the mapped PlankaError for any other non-2xx
        """
        method = method.upper()
        config = self.config
        token = await self.get_token()
        context = f"{method} {path}"
        start = time.perf_counter()

        try:
            # httpx timeouts apply per connect/read/write step; this bounds the whole call.
            with anyio.fail_after(self.timeout_seconds):
                resp = await self.http.request(
                    method,
                    f"{config.base_url}{path}",
                    json=json,
                    headers={"Authorization": f"Bearer {token}"},
                )
        except (httpx.TimeoutException, TimeoutError) as exc:
            raise PlankaNetworkError(
                f"Request timeout: {context}", timeout=True, context=context
            ) from exc
        except httpx.RequestError as exc:
            raise PlankaNetworkError(
                f"Network error: {context}: {exc}", context=context
            ) from exc

        duration_ms = int((time.perf_counter() - start) * 1000)
        self.log.debug(
            "planka.request",
            extra={
                "tool": tool,
                "method": method,
                "path": path,
                "status": resp.status_code,
                "duration_ms": duration_ms,
                "retry": _is_retry,
            },
        )

        if resp.status_code == 204:
            return None

        data = self._safe_json(resp)

        if not resp.is_success:
            if resp.status_code == 401 and self._token and not _is_retry:
                self.clear_token()
                log_event("auth.retry", method=method, path=path, status=401)
                return await self.request(
                    method, path, json=json, tool=tool, _is_retry=True
                )
            raise error_from_response(resp.status_code, data, context)

        return data

    @staticmethod
    def _safe_json(resp: httpx.Response) -> Any:
        """Best-effort JSON parse; None when the body is empty or not JSON."""
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            return None

    async def get(self, path: str, *, tool: Optional[str] = None) -> Any:
        return await self.request("GET", path, tool=tool)

    async def post(
        self, path: str, *, json: Dict[str, Any], tool: Optional[str] = None
    ) -> Any:
        return await self.request("POST", path, json=json, tool=tool)

    async def patch(
        self, path: str, *, json: Dict[str, Any], tool: Optional[str] = None
    ) -> Any:
        return await self.request("PATCH", path, json=json, tool=tool)

    async def delete(self, path: str, *, tool: Optional[str] = None) -> Any:
        return await self.request("DELETE", path, tool=tool)

    async def request_model(
        self, model: Type[T], method: str, path: str, **kwargs: Any
    ) -> T:
        payload = await self.request(method, path, **kwargs)
        return parse_response(model, payload, f"{method.upper()} {path}")


def create_client_from_env(**kwargs: Any) -> PlankaClient:
    """Create a PlankaClient that reads its configuration from the environment on first use."""
    return PlankaClient(**kwargs)


__all__ = [
    "PlankaClient",
    "create_client_from_env",
    "REQUEST_TIMEOUT_SECONDS",
    "TOKEN_TTL_SECONDS",
]

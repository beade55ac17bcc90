"""Brokerage service abstraction and the Alpaca REST v2 implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import UTC, datetime, timedelta
import logging
from typing import Any

import httpx

from alpaca_cli.config import Configuration, Settings
from alpaca_cli.exceptions import AlpacaCliError, ErrorCode
from alpaca_cli.models import Bar, Order, OrderRequest, Position

logger = logging.getLogger(__name__)

CONFIGURE_SUGGESTION = "See 'alpaca help configure' for more information."

TIMEFRAME_ALIASES = {
    "minute": "1Min",
    "hour": "1Hour",
    "day": "1Day",
}

# Without a start the data API only looks at the current session, which is empty
# outside market hours.
BAR_LOOKBACK = {
    "1Min": timedelta(days=7),
    "1Hour": timedelta(days=30),
    "1Day": timedelta(days=365),
}
DEFAULT_BAR_LOOKBACK = timedelta(days=7)


class BrokerService(ABC):
    """Remote trading operations used by the command handlers."""

    async def __aenter__(self) -> "BrokerService":
        return self

    async def __aexit__(self, *_: object) -> None:
        return None

    @abstractmethod
    async def create_order(self, order: OrderRequest) -> Order:
        raise NotImplementedError

    @abstractmethod
    async def get_positions(self) -> list[Position]:
        raise NotImplementedError

    @abstractmethod
    async def get_bars(self, timeframe: str, symbol: str, *, limit: int = 1) -> dict[str, list[Bar]]:
        raise NotImplementedError


class AlpacaClient(BrokerService):
    def __init__(
        self,
        *,
        key_id: str,
        secret_key: str,
        base_url: str,
        data_url: str,
        timeout_seconds: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._headers = {
            "APCA-API-KEY-ID": key_id,
            "APCA-API-SECRET-KEY": secret_key,
        }
        self._base_url = base_url.rstrip("/")
        self._data_url = data_url.rstrip("/")
        self._timeout = timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "AlpacaClient":
        self._client = httpx.AsyncClient(
            headers=self._headers,
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *_: object) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def create_order(self, order: OrderRequest) -> Order:
        payload = order.model_dump(mode="json", exclude_none=True)
        data = await self._request("POST", f"{self._base_url}/v2/orders", json=payload)
        return Order.model_validate(data)

    async def get_positions(self) -> list[Position]:
        data = await self._request("GET", f"{self._base_url}/v2/positions")
        return [Position.model_validate(item) for item in data or []]

    async def get_bars(self, timeframe: str, symbol: str, *, limit: int = 1) -> dict[str, list[Bar]]:
        resolved = TIMEFRAME_ALIASES.get(timeframe, timeframe)
        start = datetime.now(UTC) - BAR_LOOKBACK.get(resolved, DEFAULT_BAR_LOOKBACK)
        params = {
            "symbols": symbol.upper(),
            "timeframe": resolved,
            "start": start.isoformat(timespec="seconds"),
            "limit": limit,
            "sort": "desc",
        }
        data = await self._request("GET", f"{self._data_url}/v2/stocks/bars", params=params)
        raw_bars = (data or {}).get("bars") or {}
        return {key: [Bar.model_validate(bar) for bar in bars or []] for key, bars in raw_bars.items()}

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        if self._client is None:
            raise RuntimeError("AlpacaClient must be used as an async context manager")

        logger.debug("alpaca request %s %s", method, url)
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            raise AlpacaCliError(ErrorCode.TIMEOUT, f"{method} {url} timed out: {exc}") from exc
        except httpx.RequestError as exc:
            raise AlpacaCliError(
                ErrorCode.REMOTE_UNAVAILABLE,
                f"{method} {url} failed: {exc}",
                suggestion="Check network connectivity and Alpaca API availability.",
            ) from exc

        logger.debug("alpaca response %s %s -> %s", method, url, response.status_code)
        if response.is_error:
            raise AlpacaCliError(
                ErrorCode.REMOTE_REJECTED,
                _error_message(response),
                details={"status_code": response.status_code},
            )
        if not response.content:
            return None
        return response.json()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    text = response.text.strip()
    return text or f"request failed with HTTP {response.status_code}"


def require_credentials(config: Configuration) -> tuple[str, str]:
    if not config.key_id or not config.secret_key:
        raise AlpacaCliError(
            ErrorCode.CONFIG_MISSING,
            "No alpaca configuration found.",
            suggestion=CONFIGURE_SUGGESTION,
        )
    return config.key_id, config.secret_key


def connect(config: Configuration, settings: Settings) -> BrokerService:
    key_id, secret_key = require_credentials(config)
    logger.debug("using %s trading at %s", "paper" if config.is_paper else "live", config.resolved_base_url)
    return AlpacaClient(
        key_id=key_id,
        secret_key=secret_key,
        base_url=config.resolved_base_url,
        data_url=settings.data_url,
        timeout_seconds=settings.request_timeout_seconds,
    )

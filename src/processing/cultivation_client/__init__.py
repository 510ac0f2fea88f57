"""Cultivation client factory.

Provides get_client() / set_client() to swap implementations:
- InProcessCultivationClient when every context runs in one process (default)
- HttpCultivationClient when cultivation is reached over the internal API

Select with the CULTIVATION_CLIENT environment variable ("in_process" or
"http"). The http client reads GATEWAY_INTERNAL_API, INTERNAL_API_KEY and
RPC_TIMEOUT_SECONDS.
"""

import os

from processing.cultivation_client.port import CultivationClient

_current_client: CultivationClient | None = None


def _build_client() -> CultivationClient:
    adapter = os.environ.get("CULTIVATION_CLIENT", "in_process")
    if adapter == "in_process":
        from processing.cultivation_client.in_process import InProcessCultivationClient

        return InProcessCultivationClient()
    if adapter == "http":
        from processing.cultivation_client.http_adapter import DEFAULT_TIMEOUT_SECONDS, HttpCultivationClient

        base_url = os.environ.get("GATEWAY_INTERNAL_API")
        if not base_url:
            raise ValueError("GATEWAY_INTERNAL_API must be set for the http cultivation client")
        return HttpCultivationClient(
            base_url=base_url,
            api_key=os.environ.get("INTERNAL_API_KEY", ""),
            timeout=float(os.environ.get("RPC_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)),
        )
    raise ValueError(f"Unknown cultivation client: {adapter}")


def get_client() -> CultivationClient:
    """Return the configured cultivation client (singleton)."""
    global _current_client
    if _current_client is None:
        _current_client = _build_client()
    return _current_client


def set_client(client: CultivationClient) -> None:
    """Override the active cultivation client (useful for tests)."""
    global _current_client
    _current_client = client


def reset_client() -> None:
    global _current_client
    _current_client = None

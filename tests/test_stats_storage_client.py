try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import httpx
import pytest

from report_analyzer.clients.stats_storage import StatsStorageClient, resolve_stats_url
from report_analyzer.core.config import StorageSettings
from report_analyzer.core.errors import NetworkError

STORAGE_URL = "https://s3.eu-west-1.amazonaws.com/stats.tweetbinder.com/abc123/stats.json"


def _client(handler) -> StatsStorageClient:
    return StatsStorageClient(StorageSettings(), transport=httpx.MockTransport(handler))


def test_resolve_uses_last_path_segment() -> None:
    assert resolve_stats_url("https://dash.tweetbinder.com/report/abc123") == STORAGE_URL


def test_resolve_is_deterministic() -> None:
    link = "https://dash.tweetbinder.com/report/xyz-987"
    assert resolve_stats_url(link) == resolve_stats_url(link)


@pytest.mark.parametrize(
    ("reference", "report_id"),
    [
        ("abc123", "abc123"),
        ("https://example.com/a/b/c/report%20id", "report%20id"),
        ("https://dash.tweetbinder.com/report/", ""),
    ],
)
def test_resolve_does_not_validate_or_encode(reference: str, report_id: str) -> None:
    assert resolve_stats_url(reference) == (
        f"https://s3.eu-west-1.amazonaws.com/stats.tweetbinder.com/{report_id}/stats.json"
    )


def test_client_resolve_honours_configured_template() -> None:
    settings = StorageSettings(STATS_URL_TEMPLATE="https://mirror.test/{report_id}.json")
    client = StatsStorageClient(settings)

    assert client.resolve("https://dash.tweetbinder.com/report/r1") == "https://mirror.test/r1.json"


@pytest.mark.asyncio
async def test_fetch_returns_parsed_json(stats_document: dict) -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=stats_document)

    document = await _client(handler).fetch(STORAGE_URL)

    assert document == stats_document
    assert len(requests) == 1
    assert str(requests[0].url) == STORAGE_URL
    assert "authorization" not in requests[0].headers


@pytest.mark.asyncio
async def test_fetch_raises_network_error_on_http_status() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(403, text="<Error>AccessDenied</Error>")

    with pytest.raises(NetworkError) as exc_info:
        await _client(handler).fetch(STORAGE_URL)

    assert exc_info.value.status_code == 403
    assert "403" in str(exc_info.value)
    assert len(calls) == 1  # single attempt, no retry


@pytest.mark.asyncio
async def test_fetch_raises_network_error_on_transport_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Name or service not known", request=request)

    with pytest.raises(NetworkError) as exc_info:
        await _client(handler).fetch(STORAGE_URL)

    assert exc_info.value.status_code is None
    assert "Name or service not known" in str(exc_info.value)


@pytest.mark.asyncio
async def test_fetch_raises_network_error_on_malformed_json() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="{not json")

    with pytest.raises(NetworkError) as exc_info:
        await _client(handler).fetch(STORAGE_URL)

    assert "not valid JSON" in str(exc_info.value)

"""Client for the public bucket that hosts Tweet Binder report statistics."""

from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

from report_analyzer.core.config import DEFAULT_STATS_URL_TEMPLATE, StorageSettings
from report_analyzer.core.errors import NetworkError

logger = logging.getLogger(__name__)


def resolve_stats_url(report_reference: str, template: str | None = None) -> str:
    """Map a report link to the location of its raw ``stats.json`` document.

    The final ``/``-delimited segment is used as the report identifier without
    any validation or encoding; malformed links only fail once fetched.
    """
    report_id = report_reference.split("/")[-1]
    return (template or DEFAULT_STATS_URL_TEMPLATE).format(report_id=report_id)


class StatsStorageClient:
    """Fetch report statistics documents over HTTP."""

    def __init__(
        self,
        settings: StorageSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    def resolve(self, report_reference: str) -> str:
        return resolve_stats_url(report_reference, self._settings.stats_url_template)

    async def fetch(self, storage_url: str) -> Dict[str, Any]:
        """Return the parsed JSON body, raising ``NetworkError`` on any failure."""
        async with httpx.AsyncClient(
            timeout=self._settings.fetch_timeout_seconds,
            transport=self._transport,
        ) as client:
            try:
                response = await client.get(storage_url)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                status_code = exc.response.status_code
                raise NetworkError(
                    f"Request failed with status code {status_code}",
                    status_code=status_code,
                ) from exc
            except httpx.HTTPError as exc:
                raise NetworkError(str(exc) or exc.__class__.__name__) from exc

        try:
            document = response.json()
        except ValueError as exc:
            raise NetworkError(
                f"Response body is not valid JSON: {exc}",
                status_code=response.status_code,
            ) from exc

        logger.info("Fetched statistics document from %s", storage_url)
        return document


__all__ = ["StatsStorageClient", "resolve_stats_url"]

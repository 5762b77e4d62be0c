"""Release catalog client for the Go download index.

One GET against ``<base_url>?mode=json``, decoded into ``Release`` records
in the order the index returns them (newest first). No retries and no
caching: any failure propagates to the caller as a ``CatalogError``.
"""

from __future__ import annotations

import json

import httpx

from goupdate.constants import CATALOG_QUERY, DEFAULT_BASE_URL, DEFAULT_USER_AGENT
from goupdate.logging import get_logger
from goupdate.updater.errors import DecodeError, HTTPStatusError, TransportError
from goupdate.updater.models import Release

log = get_logger("goupdate.updater.catalog")


def parse_catalog(payload: bytes | str) -> list[Release]:
    """Decode a catalog document into releases, preserving order.

    Raises ``DecodeError`` if the payload is not JSON or does not have the
    shape of a release list.
    """
    try:
        data = json.loads(payload)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DecodeError(f"catalog is not valid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise DecodeError(f"catalog must be a JSON array, got {type(data).__name__}")

    try:
        return [Release.from_dict(entry) for entry in data]
    except ValueError as exc:
        raise DecodeError(f"malformed catalog entry: {exc}") from exc


class ReleaseCatalog:
    """Fetches the list of published Go releases.

    The caller owns ``client`` and therefore its timeout and lifetime.
    """

    def __init__(
        self,
        client: httpx.Client,
        endpoint: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        referer: str | None = None,
    ) -> None:
        self._client = client
        self._endpoint = endpoint
        self._user_agent = user_agent
        self._referer = referer or endpoint

    def fetch(self) -> list[Release]:
        """Fetch and decode the catalog.

        Raises:
            TransportError: the request could not be sent or the connection failed.
            HTTPStatusError: the index returned a non-2xx status.
            DecodeError: the body is not a valid catalog.
        """
        headers = {
            "Referer": self._referer,
            "User-Agent": self._user_agent,
        }

        try:
            resp = self._client.get(self._endpoint, params=CATALOG_QUERY, headers=headers)
        except httpx.RequestError as exc:
            log.warning("catalog_request_failed", url=self._endpoint, error=str(exc))
            raise TransportError(f"request to {self._endpoint} failed: {exc}") from exc

        if not resp.is_success:
            log.warning(
                "catalog_http_error",
                url=self._endpoint,
                status=resp.status_code,
            )
            raise HTTPStatusError(resp.status_code, resp.reason_phrase)

        releases = parse_catalog(resp.content)
        log.debug(
            "catalog_fetched",
            releases=len(releases),
            newest=releases[0].version if releases else None,
        )
        return releases

"""Client for the static shader repository.

Pulls the shader list, the developer index and every developer file from the
upstream host and merges them into one Snapshot. Only the two list files are
mandatory; a broken developer file is logged and left out.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from config import (
    DEVELOPER_DIR,
    DEVELOPER_INDEX_PATH,
    SHADER_LIST_PATH,
    UPSTREAM_BASE_URL,
    settings,
)
from errors import UpstreamError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Point-in-time view of the repository. Replaced wholesale, never edited."""

    shaders: tuple
    developers: tuple

    def to_dict(self) -> dict:
        return {"shaders": list(self.shaders), "developers": list(self.developers)}


def _index_entries(index: Any) -> list[tuple[str, Any]]:
    """Return (id, filename) pairs from the developer index."""
    if isinstance(index, dict):
        return [(str(key), value) for key, value in index.items()]
    if isinstance(index, list):
        return [(str(i), value) for i, value in enumerate(index)]
    raise UpstreamError(DEVELOPER_INDEX_PATH, f"expected an object, got {type(index).__name__}")


class RepositoryClient:
    def __init__(
        self,
        base_url: str = UPSTREAM_BASE_URL,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = settings.upstream_timeout if timeout is None else timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def _get_required(self, client: httpx.AsyncClient, path: str) -> Any:
        try:
            resp = await client.get(path)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPError as e:
            raise UpstreamError(path, str(e) or type(e).__name__) from e
        except ValueError as e:
            raise UpstreamError(path, f"invalid JSON: {e}") from e

    async def _fetch_developer(
        self, client: httpx.AsyncClient, dev_id: str, filename: Any
    ) -> dict | None:
        """Fetch one developer file. Returns the record or None on failure.

        The record's "id" is always the index key; an "id" inside the
        document is discarded.
        """
        try:
            resp = await client.get(f"{DEVELOPER_DIR}/{filename}")
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Failed to fetch dev %s: %s", filename, e)
            return None
        except ValueError as e:
            logger.warning("Failed to fetch dev %s: invalid JSON (%s)", filename, e)
            return None

        if not isinstance(data, dict):
            logger.warning("Failed to fetch dev %s: not a JSON object", filename)
            return None

        record = {"id": dev_id}
        record.update((key, value) for key, value in data.items() if key != "id")
        return record

    async def fetch_snapshot(self) -> Snapshot:
        """Fetch everything and build a fresh Snapshot.

        Raises UpstreamError if the shader list or the developer index
        cannot be retrieved.
        """
        logger.info("Fetching fresh data from %s", self.base_url)

        async with self._client() as client:
            shaders, index = await asyncio.gather(
                self._get_required(client, SHADER_LIST_PATH),
                self._get_required(client, DEVELOPER_INDEX_PATH),
                return_exceptions=True,
            )
            for result in (shaders, index):
                if isinstance(result, BaseException):
                    raise result
            if not isinstance(shaders, list):
                raise UpstreamError(SHADER_LIST_PATH, f"expected an array, got {type(shaders).__name__}")
            entries = _index_entries(index)
            results = await asyncio.gather(
                *[self._fetch_developer(client, dev_id, filename) for dev_id, filename in entries]
            )

        developers = tuple(r for r in results if r is not None)
        if len(developers) < len(entries):
            logger.warning("Dropped %d of %d developer files", len(entries) - len(developers), len(entries))

        logger.info("Fetched %d shaders and %d developers", len(shaders), len(developers))
        return Snapshot(shaders=tuple(shaders), developers=developers)

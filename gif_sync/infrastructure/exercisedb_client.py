"""
HTTP client for the ExerciseDB API (served through RapidAPI).

One call fetches one page (`limit`/`offset` query parameters) and returns the
validated `SourceRecord`s. Every failure mode of a single request is surfaced
as `TransientFetchError` so the fetcher can apply its retry policy uniformly.
"""

from __future__ import annotations

from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from gif_sync.config import SyncConfig
from gif_sync.domain.models import SourceRecord
from gif_sync.exceptions import TransientFetchError


class ExerciseDBClient:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        api_host: str,
        timeout: float = 15.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = base_url
        self._client = httpx.Client(
            timeout=timeout,
            headers={
                "X-RapidAPI-Key": api_key,
                "X-RapidAPI-Host": api_host,
                "Accept": "application/json",
            },
            transport=transport,
        )

    @classmethod
    def from_config(
        cls, config: SyncConfig, transport: Optional[httpx.BaseTransport] = None
    ) -> "ExerciseDBClient":
        return cls(
            base_url=config.api_base_url,
            api_key=config.credentials.api_key,
            api_host=config.credentials.api_host,
            timeout=config.timeout_seconds,
            transport=transport,
        )

    def fetch_page(self, offset: int, limit: int) -> List[SourceRecord]:
        """
        Request one page. The result may be shorter than `limit` (or empty)
        past the end of the collection.
        """
        try:
            r = self._client.get(self.base_url, params={"limit": limit, "offset": offset})
            r.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise TransientFetchError(
                offset, f"HTTP {status} from {self.base_url}", status_code=status
            ) from exc
        except httpx.HTTPError as exc:
            raise TransientFetchError(offset, f"{type(exc).__name__}: {exc}") from exc

        try:
            data: Any = r.json()
        except ValueError as exc:
            raise TransientFetchError(offset, "response body is not valid JSON") from exc
        if not isinstance(data, list):
            raise TransientFetchError(
                offset, f"expected a JSON array, got {type(data).__name__}"
            )

        try:
            return [SourceRecord.model_validate(item) for item in data]
        except ValidationError as exc:
            raise TransientFetchError(offset, f"invalid exercise payload: {exc}") from exc

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ExerciseDBClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["ExerciseDBClient"]

"""Release-API-backed metadata provider for Electron.

Releases come from the Electron headers index (one JSON document listing
every published version with its date).  Asset sizes come from the GitHub
Releases API: nightly builds are published in ``electron/nightlies``,
everything else in ``electron/electron``.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import datetime

import httpx

from sizewatch.errors import FetchError
from sizewatch.models.releases import AssetMeta, Release
from sizewatch.observability.logging import get_logger
from sizewatch.sources.base import ReleaseIndexProvider
from sizewatch.sources.static import parse_release_date

_log = get_logger("sources.electron")

DEFAULT_RELEASES_URL = "https://electronjs.org/headers/index.json"
DEFAULT_GITHUB_API_URL = "https://api.github.com"

# electron-v38.0.0-darwin-arm64.zip; suffixed variants (-symbols, -dsym, ...) are excluded
_RE_ASSET_NAME = re.compile(
    r"^electron-(v\d+\.\d+\.\d+(?:-(?:alpha|beta|nightly)\.\d+)?)-(.+?)-(.+?)(?:-(.+?))?\.zip$"
)


def platform_from_asset_name(name: str) -> str | None:
    """Return ``<os>-<arch>`` for a plain distribution zip, else None."""
    match = _RE_ASSET_NAME.match(name)
    if match is None or match.group(4):
        return None
    return f"{match.group(2)}-{match.group(3)}"


class ElectronReleaseProvider(ReleaseIndexProvider):
    """Serves Electron release and dist-zip size metadata over HTTP.

    Args:
        releases_url:   Headers index URL.
        github_api_url: GitHub REST API base URL.
        github_token:   Optional token to raise the GitHub rate limit.
        window_days:    Tracking window for ``get_latest_versions``.
        timeout:        HTTP timeout in seconds.
        transport:      Optional httpx transport (tests inject a mock).
        now:            Fixed reference time for the tracking window.
    """

    def __init__(
        self,
        releases_url: str = DEFAULT_RELEASES_URL,
        github_api_url: str = DEFAULT_GITHUB_API_URL,
        github_token: str | None = None,
        window_days: int = 60,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        now: datetime | None = None,
    ) -> None:
        super().__init__(window_days=window_days, now=now)
        self._releases_url = releases_url
        self._github_api_url = github_api_url.rstrip("/")
        headers = {"Accept": "application/vnd.github+json"}
        if github_token:
            headers["Authorization"] = f"Bearer {github_token}"
        self._github_headers = headers
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport, follow_redirects=True)

    async def close(self) -> None:
        await self._client.aclose()

    async def _fetch_releases(self) -> Sequence[Release]:
        """Fetch the headers index.

        Raises:
            FetchError: if the index cannot be downloaded or parsed.
        """
        try:
            response = await self._client.get(self._releases_url)
            response.raise_for_status()
            payload = response.json()
            releases = [
                Release(version=str(entry["version"]), published_at=parse_release_date(str(entry["date"])))
                for entry in payload
            ]
        except httpx.HTTPError as exc:
            _log.error("release_index_fetch_failed", url=self._releases_url, error=str(exc))
            raise FetchError(f"Failed to fetch releases from {self._releases_url}: {exc}") from exc
        except (ValueError, KeyError, TypeError) as exc:
            _log.error("release_index_invalid", url=self._releases_url, error=str(exc))
            raise FetchError(f"Invalid release index from {self._releases_url}: {exc}") from exc

        _log.info("release_index_loaded", releases=len(releases))
        return releases

    async def get_asset_metas(self, version: str) -> list[AssetMeta]:
        """Return dist-zip sizes for *version*; ``[]`` on any retrieval failure."""
        tag = version if version.startswith("v") else f"v{version}"
        repo = "nightlies" if "nightly" in version else "electron"
        url = f"{self._github_api_url}/repos/electron/{repo}/releases/tags/{tag}"

        try:
            response = await self._client.get(url, headers=self._github_headers)
            response.raise_for_status()
            assets = response.json().get("assets", [])
        except httpx.HTTPError as exc:
            _log.error("asset_fetch_failed", version=version, url=url, error=str(exc))
            return []
        except (ValueError, AttributeError) as exc:
            _log.error("asset_payload_invalid", version=version, url=url, error=str(exc))
            return []

        if not isinstance(assets, list):
            _log.error("asset_payload_invalid", version=version, url=url, error="assets is not a list")
            return []

        metas: list[AssetMeta] = []
        for asset in assets:
            try:
                platform = platform_from_asset_name(str(asset.get("name", "")))
                if platform is None:
                    continue
                metas.append(AssetMeta(version=version, target_platform=platform, size_in_bytes=int(asset["size"])))
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                _log.warning("asset_payload_invalid", version=version, asset=repr(asset)[:200], error=str(exc))
        _log.debug("asset_metas_loaded", version=version, count=len(metas))
        return metas

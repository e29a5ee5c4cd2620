# Baseline persistence in a GitHub Gist.
#
# Stored document shapes:
#
#   wrapped (current)   {"bundle": {"/a.js": 123, ...}, "devStats": {"size": 1, "count": 2}}
#   legacy              {"/a.js": 123, ...}
#
# decode_baseline resolves either shape into one Baseline value at load time;
# nothing downstream looks at the raw document again.

from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from result import Err, Ok, Result

from bundlesize.models.snapshot import Baseline, DevStats, SizeSnapshot, freeze_snapshot

logger = logging.getLogger(__name__)

GIST_FILE_NAME = "bundle-stats.json"
GITHUB_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"

_BUNDLE_KEY = "bundle"
_DEV_STATS_KEY = "devStats"


class BaselineFormatError(ValueError):
    """Stored document does not hold a size snapshot."""


def _decode_sizes(raw: Any) -> SizeSnapshot:
    if not isinstance(raw, dict):
        msg = f"Expected an object of file sizes, got {type(raw).__name__}."
        raise BaselineFormatError(msg)
    sizes: dict[str, int] = {}
    for name, size in raw.items():
        if isinstance(size, bool) or not isinstance(size, int):
            msg = f"Size of {name!r} must be an integer, got {size!r}."
            raise BaselineFormatError(msg)
        sizes[str(name)] = size
    return freeze_snapshot(sizes)


def _decode_dev_stats(raw: Any) -> DevStats | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        msg = f"Expected devStats to be an object, got {type(raw).__name__}."
        raise BaselineFormatError(msg)
    try:
        return DevStats(size=int(raw.get("size", 0)), count=int(raw.get("count", 0)))
    except (TypeError, ValueError) as exc:
        raise BaselineFormatError(f"Invalid devStats: {exc}.") from exc


def decode_baseline(payload: Any) -> Baseline:
    if not isinstance(payload, dict):
        msg = f"Stored document must be a JSON object, got {type(payload).__name__}."
        raise BaselineFormatError(msg)
    if _BUNDLE_KEY in payload:
        return Baseline(
            bundle=_decode_sizes(payload[_BUNDLE_KEY]),
            dev_stats=_decode_dev_stats(payload.get(_DEV_STATS_KEY)),
        )
    return Baseline(bundle=_decode_sizes(payload))


def encode_baseline(baseline: Baseline) -> dict[str, Any]:
    document: dict[str, Any] = {_BUNDLE_KEY: dict(baseline.bundle)}
    if baseline.dev_stats is not None:
        document[_DEV_STATS_KEY] = {"size": baseline.dev_stats.size, "count": baseline.dev_stats.count}
    return document


@dataclass(slots=True, frozen=True)
class GistSettings:
    gist_id: str
    token: str
    api_url: str = GITHUB_API_URL
    filename: str = GIST_FILE_NAME
    timeout: float = 30.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> GistSettings:
        return cls(
            gist_id=environ.get("GIST_ID", ""),
            token=environ.get("GITHUB_TOKEN", ""),
            api_url=environ.get("GITHUB_API_URL", GITHUB_API_URL).rstrip("/"),
        )

    @property
    def url(self) -> str:
        return f"{self.api_url}/gists/{self.gist_id}"


class GistStore:
    def __init__(self, settings: GistSettings) -> None:
        self._settings = settings

    def _request(self, method: str, body: dict[str, Any] | None = None) -> urllib.request.Request:
        headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self._settings.token}",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }
        data = None
        if body is not None:
            data = json.dumps(body).encode("utf-8")
            headers["Content-Type"] = "application/json"
        return urllib.request.Request(self._settings.url, data=data, headers=headers, method=method)

    def fetch(self) -> Result[Baseline, str]:
        """Download and decode the stored baseline.

        A gist without the snapshot file decodes as an empty baseline.
        """
        if not self._settings.gist_id:
            return Err("GIST_ID is not configured.")

        try:
            with urllib.request.urlopen(self._request("GET"), timeout=self._settings.timeout) as resp:
                gist = json.loads(resp.read().decode("utf-8"))
            stored = gist.get("files", {}).get(self._settings.filename)
            payload = json.loads(stored["content"]) if stored else {}
            baseline = decode_baseline(payload)
        except urllib.error.HTTPError as exc:
            return Err(f"Failed to fetch gist {self._settings.gist_id}: HTTP {exc.code} {exc.reason}.")
        except (urllib.error.URLError, http.client.HTTPException, OSError) as exc:
            return Err(f"Failed to fetch gist {self._settings.gist_id}: {exc}.")
        except (ValueError, KeyError, AttributeError, TypeError) as exc:
            return Err(f"Malformed gist {self._settings.gist_id}: {exc}.")

        logger.info("Fetched baseline with %d files", len(baseline.bundle))
        return Ok(baseline)

    def update(self, baseline: Baseline) -> Result[None, str]:
        if not self._settings.gist_id:
            return Err("GIST_ID is not configured.")

        content = json.dumps(encode_baseline(baseline), indent=2)
        body = {"files": {self._settings.filename: {"content": content}}}
        try:
            with urllib.request.urlopen(self._request("PATCH", body), timeout=self._settings.timeout):
                pass
        except urllib.error.HTTPError as exc:
            return Err(f"Failed to update gist {self._settings.gist_id}: HTTP {exc.code} {exc.reason}.")
        except (urllib.error.URLError, http.client.HTTPException, OSError) as exc:
            return Err(f"Failed to update gist {self._settings.gist_id}: {exc}.")

        logger.info("Stored baseline with %d files", len(baseline.bundle))
        return Ok(None)

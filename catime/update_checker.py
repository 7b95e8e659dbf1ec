"""Release version comparison and latest-release lookup."""

from __future__ import annotations

import re
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Callable

USER_AGENT = "Catime Update Checker"

_VERSION_MAX_LEN = 31
_URL_MAX_LEN = 255
_TAG_KEY = '"tag_name":'
_URL_KEY = '"browser_download_url":'
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class UpdateError(Exception):
    """Raised when release information cannot be fetched or parsed."""


@dataclass(frozen=True)
class ReleaseInfo:
    """The newest published release: its version and download location."""

    version: str
    download_url: str


@dataclass(frozen=True)
class UpdateCheck:
    """Outcome of comparing the running version with the latest release."""

    current_version: str
    latest_version: str
    download_url: str

    @property
    def update_available(self) -> bool:
        return compare_versions(self.latest_version, self.current_version) > 0


def _version_parts(version: str) -> tuple[int, int, int]:
    """Read up to three dot-separated leading integers; missing parts are 0."""
    parts = [0, 0, 0]
    rest = version
    for index in range(3):
        match = _LEADING_INT.match(rest)
        if not match:
            break
        parts[index] = int(match.group(1))
        rest = rest[match.end():]
        if not rest.startswith("."):
            break
        rest = rest[1:]
    return parts[0], parts[1], parts[2]


def compare_versions(version1: str, version2: str) -> int:
    """Return 1 if version1 is newer, -1 if older, 0 if equal."""
    first = _version_parts(version1)
    second = _version_parts(version2)
    if first > second:
        return 1
    if first < second:
        return -1
    return 0


def _quoted_after(text: str, start: int) -> str | None:
    first = text.find('"', start)
    if first < 0:
        return None
    second = text.find('"', first + 1)
    if second < 0:
        return None
    return text[first + 1:second]


def parse_latest_release(json_text: str) -> ReleaseInfo:
    """Extract the tag name and first download URL from a release document."""
    tag_pos = json_text.find(_TAG_KEY)
    if tag_pos < 0:
        raise UpdateError("tag_name field not found")
    tag = _quoted_after(json_text, tag_pos + len(_TAG_KEY))
    if tag is None:
        raise UpdateError("malformed tag_name value")
    version = tag[:_VERSION_MAX_LEN]
    if version[:1] in ("v", "V"):
        version = version[1:]

    url_pos = json_text.find(_URL_KEY)
    if url_pos < 0:
        raise UpdateError("browser_download_url field not found")
    url = _quoted_after(json_text, url_pos + len(_URL_KEY) - 1)
    if url is None:
        raise UpdateError("malformed browser_download_url value")
    return ReleaseInfo(version=version, download_url=url[:_URL_MAX_LEN])


def fetch_latest_release(url: str, timeout: float = 10.0) -> ReleaseInfo:
    """Download the release document at ``url`` and parse it."""
    request = urllib.request.Request(
        url, headers={"User-Agent": USER_AGENT, "Cache-Control": "no-cache"}
    )
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            body = response.read()
    except (urllib.error.URLError, OSError, ValueError) as exc:
        raise UpdateError(f"could not reach update server: {exc}") from exc
    return parse_latest_release(body.decode("utf-8", errors="replace"))


def check_for_update(
    current_version: str, fetch: Callable[[], ReleaseInfo]
) -> UpdateCheck:
    """Fetch the latest release and compare it with ``current_version``."""
    release = fetch()
    return UpdateCheck(
        current_version=current_version,
        latest_version=release.version,
        download_url=release.download_url,
    )
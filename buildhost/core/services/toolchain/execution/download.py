"""
L4 Execution — Installer download.

A single HTTPS GET, read fully into memory. No retries and no resume:
a failed fetch fails the run and the outer image build retries.
"""

from __future__ import annotations

import http.client
import logging
import urllib.error
import urllib.request

from buildhost.core.models.config import DEFAULT_BASE_URL
from buildhost.core.models.profile import ArchitectureProfile
from buildhost.core.services.toolchain.data.constants import (
    DOWNLOAD_TIMEOUT,
    USER_AGENT,
)
from buildhost.core.services.toolchain.domain.errors import DownloadError
from buildhost.core.services.toolchain.domain.resolution import installer_url

logger = logging.getLogger(__name__)


def _fmt_size(n: int) -> str:
    """Human-readable byte count."""
    size = float(n)
    for unit in ("B", "KB", "MB"):
        if size < 1024:
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GB"


def fetch_installer(
    profile: ArchitectureProfile,
    base_url: str = DEFAULT_BASE_URL,
    *,
    timeout: int = DOWNLOAD_TIMEOUT,
) -> bytes:
    """Download the installer built for ``profile``.

    Args:
        profile: Resolved architecture profile.
        base_url: Artifact host, e.g. ``https://static.rust-lang.org``.
        timeout: HTTP timeout in seconds.

    Returns:
        The raw installer bytes (unverified).

    Raises:
        DownloadError: Transport failure, truncated or malformed response,
            timeout, or non-200 response.
    """
    url = installer_url(profile, base_url)
    logger.info("Downloading installer for %s from %s", profile.target_triple, url)

    request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    try:
        with urllib.request.urlopen(request, timeout=timeout) as resp:  # noqa: S310
            status = resp.getcode()
            if status != 200:
                raise DownloadError(url, f"HTTP {status}")
            data = resp.read()
    except urllib.error.HTTPError as e:
        raise DownloadError(url, f"HTTP {e.code} {e.reason}") from e
    except urllib.error.URLError as e:
        raise DownloadError(url, str(e.reason)) from e
    except http.client.HTTPException as e:
        # IncompleteRead, BadStatusLine
        raise DownloadError(url, str(e) or type(e).__name__) from e
    except (TimeoutError, OSError) as e:
        raise DownloadError(url, str(e) or type(e).__name__) from e

    if not data:
        raise DownloadError(url, "empty response body")

    logger.info("Downloaded %s", _fmt_size(len(data)))
    return data

"""Resolve notification icon paths against the static asset root.

The asset root may be empty (packaged resources), a local directory, or an
http(s) URL. Remote icons are downloaded once with httpx and cached on disk.
"""
from __future__ import annotations

import hashlib
import logging
import time
from pathlib import Path
from typing import Dict, Optional

import httpx
from platformdirs import PlatformDirs

log = logging.getLogger(__name__)

_PACKAGE_RESOURCES = Path(__file__).resolve().parents[1] / "resources"


def _default_cache_dir() -> Path:
    dirs = PlatformDirs(appname="PushRelay", appauthor="PushRelay", roaming=False)
    return Path(dirs.user_cache_dir) / "icons"


class IconResolver:
    def __init__(
        self,
        asset_root: str = "",
        cache_dir: Optional[Path] = None,
        *,
        timeout: float = 5.0,
        retries: int = 1,
    ) -> None:
        self.asset_root = asset_root.strip()
        self._cache_dir = cache_dir
        self._timeout = timeout
        self._retries = retries
        self._resolved: Dict[str, Optional[Path]] = {}

    def _is_remote(self) -> bool:
        return self.asset_root.startswith(("http://", "https://"))

    def resolve(self, icon_path: str) -> Optional[Path]:
        """Return a local file for `icon_path`, or None if it cannot be found or fetched."""
        if icon_path in self._resolved:
            return self._resolved[icon_path]
        if self._is_remote():
            found = self._fetch(icon_path)
        else:
            root = Path(self.asset_root) if self.asset_root else _PACKAGE_RESOURCES
            candidate = root / icon_path.lstrip("/")
            found = candidate if candidate.is_file() else None
            if found is None:
                log.debug("Icon %s not found under %s", icon_path, root)
        self._resolved[icon_path] = found
        return found

    def _fetch(self, icon_path: str) -> Optional[Path]:
        url = self.asset_root.rstrip("/") + "/" + icon_path.lstrip("/")
        cache_dir = self._cache_dir or _default_cache_dir()
        suffix = Path(icon_path).suffix or ".png"
        target = cache_dir / (hashlib.sha1(url.encode("utf-8")).hexdigest() + suffix)
        if target.is_file():
            return target

        last_err: Exception | None = None
        for attempt in range(1 + self._retries):
            try:
                with httpx.Client(timeout=self._timeout) as client:
                    resp = client.get(url)
                    resp.raise_for_status()
                    content = resp.content
                cache_dir.mkdir(parents=True, exist_ok=True)
                target.write_bytes(content)
                log.info("Cached icon %s at %s", url, target)
                return target
            except Exception as e:  # broad to log and retry
                last_err = e
                if attempt < self._retries:
                    log.warning("Icon download failed (attempt %s/%s): %s", attempt + 1, 1 + self._retries, e)
                    time.sleep(0.5)

        log.warning("Could not fetch icon %s after %s attempts: %s", url, 1 + self._retries, last_err)
        return None

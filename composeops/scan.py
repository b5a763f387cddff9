"""Suggest the image scanner after a build, unless it is unwanted."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Iterable, TextIO

SCAN_SUGGEST_MSG = (
    "Use 'docker scan' to run Snyk tests against images to find vulnerabilities "
    "and learn how to fix them"
)

_SYSTEM_PLUGIN_DIRS = (
    "/usr/local/lib/docker/cli-plugins",
    "/usr/local/libexec/docker/cli-plugins",
    "/usr/lib/docker/cli-plugins",
    "/usr/libexec/docker/cli-plugins",
)


def _default_config_dir() -> Path:
    configured = os.environ.get("DOCKER_CONFIG")
    return Path(configured) if configured else Path.home() / ".docker"


def _plugin_file_name() -> str:
    name = "docker-scan"
    return name + ".exe" if sys.platform.startswith("win") else name


def scan_already_invoked(config_dir: str | os.PathLike[str] | None = None) -> bool:
    """Tell whether the scanner's config records an opt-in.

    Anything unexpected counts as invoked, so the user is not bothered.
    """
    base = Path(config_dir) if config_dir is not None else _default_config_dir()
    path = base / "scan" / "config.json"
    try:
        if not path.exists():
            return False
        if path.is_dir():
            return True
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return True
    if not isinstance(data, dict):
        return True
    optin = data.get("optin")
    if optin is None:
        return False
    if not isinstance(optin, bool):
        return True
    return optin


def scan_available(plugin_dirs: Iterable[str | os.PathLike[str]] | None = None) -> bool:
    """Tell whether a scan plugin is installed in one of the plugin directories."""
    if plugin_dirs is None:
        plugin_dirs = [_default_config_dir() / "cli-plugins", *_SYSTEM_PLUGIN_DIRS]
    name = _plugin_file_name()
    return any((Path(d) / name).is_file() for d in plugin_dirs)


def display_scan_suggest_msg(
    config_dir: str | os.PathLike[str] | None = None,
    plugin_dirs: Iterable[str | os.PathLike[str]] | None = None,
    stream: TextIO | None = None,
) -> bool:
    """Write the scan suggestion when it applies; return whether it was written."""
    if os.environ.get("DOCKER_SCAN_SUGGEST") == "false":
        return False
    if plugin_dirs is None and config_dir is not None:
        plugin_dirs = [Path(config_dir) / "cli-plugins", *_SYSTEM_PLUGIN_DIRS]
    if not scan_available(plugin_dirs):
        return False
    if scan_already_invoked(config_dir):
        return False
    out = stream if stream is not None else sys.stderr
    out.write("\n" + SCAN_SUGGEST_MSG + "\n")
    return True
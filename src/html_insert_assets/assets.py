"""
Asset classification by file extension and script loading mode.
"""

import re
from enum import Enum
from typing import Dict, Iterable, List

EXTERNAL_RE = re.compile(r"^[a-z]+://")
FILE_TYPE_RE = re.compile(r"\.(m?js|css|ico)$", re.IGNORECASE)
EXTERNAL_FILE_TYPE_RE = re.compile(r"^[a-z]+://.*\.(m?js|css|ico)(\?.*)?$", re.IGNORECASE)
MODULE_SCRIPT_RE = re.compile(r"\.(es2015\.|m)js$", re.IGNORECASE)


class AssetKind(str, Enum):
    JS = "js"
    CSS = "css"
    ICO = "ico"
    UNKNOWN = "unknown"


class ScriptMode(Enum):
    """How a <script> tag takes part in differential loading."""

    MODULE = "module"
    NOMODULE = "nomodule"
    PLAIN = "plain"


def classify_asset(path: str) -> AssetKind:
    match = EXTERNAL_FILE_TYPE_RE.match(path) or FILE_TYPE_RE.search(path)
    if not match:
        return AssetKind.UNKNOWN
    return AssetKind(match.group(1).lower().replace("mjs", "js"))


def group_assets(paths: Iterable[str]) -> Dict[AssetKind, List[str]]:
    """Group asset paths by kind, keeping input order within each kind."""
    grouped: Dict[AssetKind, List[str]] = {}
    for path in paths:
        grouped.setdefault(classify_asset(path), []).append(path)
    return grouped


def is_external(path: str) -> bool:
    return EXTERNAL_RE.match(path) is not None


def is_module_script(path: str) -> bool:
    return MODULE_SCRIPT_RE.search(path) is not None


def has_matching_module(path: str, js_assets: Iterable[str]) -> bool:
    """
    Check whether a classic script has an ES2015 counterpart in the same list.

    ``app.js`` matches ``app.mjs`` and ``app.es2015.js``, ignoring case.
    """
    stem = path[:-3]
    candidates = {(stem + ".mjs").lower(), (stem + ".es2015.js").lower()}
    return any(other.lower() in candidates for other in js_assets)


def script_mode(path: str, js_assets: List[str]) -> ScriptMode:
    if is_module_script(path):
        return ScriptMode.MODULE
    if has_matching_module(path, js_assets):
        return ScriptMode.NOMODULE
    return ScriptMode.PLAIN

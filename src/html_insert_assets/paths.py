"""
Path normalization and URL computation for injected assets.

All paths are handled as POSIX strings so the emitted URLs do not depend on
the platform the build runs on.
"""

import posixpath
import time
from typing import Callable, Optional, Sequence, Union

from loguru import logger

EXTERNAL_PREFIX = "./external/"

Timestamp = Callable[[str], Union[int, str]]


def current_millis(path: str) -> int:
    """Default cache-busting stamp: wall-clock time in milliseconds."""
    return int(time.time() * 1000)


def normalize_path(p: str) -> str:
    p = posixpath.normpath(p.replace("\\", "/"))
    if p.startswith("//"):
        p = "/" + p.lstrip("/")
    if not p.startswith(("/", ".")):
        p = f"./{p}"
    return p


def normalize_dir_path(d: str) -> str:
    d = normalize_path(d)
    if not d.endswith("/"):
        d += "/"
    return d


def remove_external(p: str) -> str:
    """Undo the ``external/`` staging prefix some build systems put on dependencies."""
    if p.startswith(EXTERNAL_PREFIX):
        p = normalize_path(p[len(EXTERNAL_PREFIX) :])
    return p


def remove_root_path(p: str, roots: Sequence[str]) -> str:
    # roots are ordered longest first, so the most specific one wins
    for root in roots:
        if p.startswith(root):
            return p[len(root) :]
    return p


def relative_to_html(p: str, output_dir: str) -> str:
    if posixpath.isabs(p):
        return p
    return posixpath.relpath(p, output_dir or ".")


class UrlBuilder:
    """Turns asset paths into URLs relative to the output document."""

    def __init__(self, output_file: str, root_dirs: Sequence[str], timestamp: Optional[Timestamp] = None):
        self.root_dirs = list(root_dirs)
        self.timestamp = timestamp or current_millis
        output_dir = normalize_dir_path(posixpath.dirname(output_file))
        rooted = remove_root_path(output_dir, self.root_dirs)
        self.output_dir = "./" + rooted[1:] if rooted.startswith("/") else rooted

    def reduce(self, orig_path: str) -> str:
        p = normalize_path(orig_path)
        p = remove_external(p)
        p = remove_root_path(p, self.root_dirs)
        p = relative_to_html(p, self.output_dir)
        return normalize_path(p)

    def to_url(self, orig_path: str) -> str:
        url_path = self.reduce(orig_path)
        if url_path != orig_path:
            logger.debug(f"reduce: {orig_path} => {url_path}")

        stamp = self.timestamp(orig_path)
        logger.debug(f"stamp: {url_path} @ {stamp}")

        return f"{url_path}?v={stamp}"

"""
Command-line token parsing into an immutable Configuration.

Accepted flags::

    --html <path> --out <path> [--assets <path>...] [--roots <dir>...] [--strict] [--verbose]

``--flag=value`` is accepted wherever ``--flag value`` is, and leading ``@file``
tokens are expanded to the lines of that file before parsing.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

from html_insert_assets.assets import AssetKind, group_assets
from html_insert_assets.errors import ConfigError
from html_insert_assets.paths import normalize_dir_path, normalize_path

ASSIGNMENT_RE = re.compile(r"^--[a-z]+=")


@dataclass(frozen=True)
class Configuration:
    input_file: str
    output_file: str
    assets: Dict[AssetKind, List[str]] = field(default_factory=dict)
    root_dirs: Tuple[str, ...] = ()
    verbose: bool = False
    strict: bool = False


def expand_flagfiles(tokens: Sequence[str]) -> List[str]:
    """
    Replace leading ``@path`` tokens with the non-blank lines of those files.

    Only tokens before the first ``--flag`` are params files; later values such
    as ``@scope/pkg/x.js`` are kept as they are.
    """
    expanded: List[str] = []
    for i, token in enumerate(tokens):
        if token.startswith("--"):
            expanded.extend(tokens[i:])
            break
        if token.startswith("@") and len(token) > 1:
            lines = Path(token[1:]).read_text(encoding="utf-8").splitlines()
            expanded.extend(line.strip() for line in lines if line.strip())
        else:
            expanded.append(token)
    return expanded


def split_assignments(tokens: Sequence[str]) -> List[str]:
    split: List[str] = []
    for token in tokens:
        if ASSIGNMENT_RE.match(token):
            split.extend(token.split("=", 1))
        else:
            split.append(token)
    return split


def read_var_args(tokens: Sequence[str], start: int) -> Tuple[List[str], int]:
    """Collect values from ``start`` up to the next ``--flag``; return them and the index after."""
    end = start
    while end < len(tokens) and not tokens[end].startswith("--"):
        end += 1
    return list(tokens[start:end]), end


def _read_value(tokens: Sequence[str], i: int):
    if i < len(tokens) and not tokens[i].startswith("--"):
        return tokens[i], i + 1
    return None, i


def parse_args(tokens: Sequence[str]) -> Configuration:
    input_file = None
    output_file = None
    asset_paths: List[str] = []
    root_dirs: List[str] = []
    verbose = False
    strict = False

    params = split_assignments(tokens)
    i = 0
    while i < len(params):
        flag = params[i]
        i += 1
        if flag == "--assets":
            asset_paths, i = read_var_args(params, i)
        elif flag == "--roots":
            root_dirs, i = read_var_args(params, i)
        elif flag == "--html":
            input_file, i = _read_value(params, i)
        elif flag == "--out":
            output_file, i = _read_value(params, i)
        elif flag == "--strict":
            strict = True
        elif flag == "--verbose":
            verbose = True
        else:
            raise ConfigError(f"Unknown arg: {flag}")

    if not input_file or not output_file:
        raise ConfigError("required: --html, --out")

    assets = group_assets(asset_paths)
    unknown = assets.get(AssetKind.UNKNOWN)
    if strict and unknown:
        raise ConfigError(f"Unknown asset types: {', '.join(unknown)}")

    # Asset paths stay literal; they are normalized when their URL is built
    normalized_roots = [normalize_dir_path(r) for r in root_dirs]
    # sorted() is stable, so equal lengths keep their command-line order
    normalized_roots = sorted(normalized_roots, key=len, reverse=True)

    return Configuration(
        input_file=normalize_path(input_file),
        output_file=normalize_path(output_file),
        assets=assets,
        root_dirs=tuple(normalized_roots),
        verbose=verbose,
        strict=strict,
    )

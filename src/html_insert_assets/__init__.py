"""Inject <script> and <link> tags for built assets into an HTML document."""

from html_insert_assets.args import Configuration, parse_args
from html_insert_assets.core import Collaborators, insert_assets
from html_insert_assets.errors import ConfigError, DocumentError, InsertAssetsError

__all__ = [
    "Collaborators",
    "ConfigError",
    "Configuration",
    "DocumentError",
    "InsertAssetsError",
    "insert_assets",
    "parse_args",
]

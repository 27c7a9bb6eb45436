"""
Top-level pipeline: parse arguments, read the document, inject the asset
tags and write the result.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from loguru import logger

from html_insert_assets.args import expand_flagfiles, parse_args
from html_insert_assets.document import inject_assets, parse_document, serialize
from html_insert_assets.log import configure_logging
from html_insert_assets.paths import Timestamp, UrlBuilder, current_millis
from html_insert_assets.writer import read_text, write_text


@dataclass
class Collaborators:
    """I/O and clock used by insert_assets; swap them out in tests."""

    read: Callable[[str], str] = read_text
    write: Callable[[str, str], None] = write_text
    timestamp: Timestamp = current_millis
    log_sink: Optional[Any] = None


def insert_assets(tokens: Sequence[str], collaborators: Optional[Collaborators] = None) -> int:
    """
    Run the whole transformation for one command line.

    Args:
        tokens: command-line tokens, without the program name
        collaborators: read/write/timestamp/log sink overrides

    Returns:
        0 on success. Failures raise ConfigError, DocumentError or OSError.
    """
    io = collaborators or Collaborators()

    config = parse_args(expand_flagfiles(tokens))
    configure_logging(config.verbose, io.log_sink)

    logger.debug(f"in: {config.input_file}")
    logger.debug(f"out: {config.output_file}")
    logger.debug(f"roots: {', '.join(config.root_dirs)}")
    for kind, files in config.assets.items():
        logger.debug(f"files ({kind.value}): {', '.join(files)}")

    soup = parse_document(io.read(config.input_file))
    urls = UrlBuilder(config.output_file, config.root_dirs, io.timestamp)
    inject_assets(soup, config.assets, urls)

    io.write(config.output_file, serialize(soup))
    return 0

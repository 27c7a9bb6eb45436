from pathlib import Path


def read_text(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise OSError(f"{path} is not valid UTF-8: {e}") from e


def write_text(path: str, content: str) -> None:
    """Write UTF-8 text, creating missing parent directories first."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")

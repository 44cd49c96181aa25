"""Source discovery: locate guide files and read them as (path, text) pairs"""

from pathlib import Path

from guidepub.errors import MetadataParseError


MD_EXTENSIONS = {'.md', '.mdx'}


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md/.mdx files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix.lower() in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix.lower() in MD_EXTENSIONS)


def _read(path: Path, rel: str) -> str:
    try:
        return path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise MetadataParseError(rel, "not valid UTF-8") from e


def read_sources(root: Path) -> list[tuple[str, str]]:
    """Read every guide under root. Paths are posix and relative to root (or the file name).

    Raises MetadataParseError naming the file when a guide is not valid UTF-8.
    """
    root = Path(root)
    if not root.exists():
        raise FileNotFoundError(f"Content path not found: {root}")
    base = root if root.is_dir() else root.parent
    sources = []
    for p in discover_files(root):
        rel = p.relative_to(base).as_posix()
        sources.append((rel, _read(p, rel)))
    return sources

"""Format routing: pick the codec for a format and report savings."""

from __future__ import annotations

import dataclasses
import logging
from enum import Enum
from pathlib import Path

from code_compressor.formats import CSS_CODEC, HTML_CODEC, JSON_CODEC, TYPESCRIPT_CODEC, Codec
from code_compressor.stats import CompressionStats, compute_stats

logger = logging.getLogger(__name__)


class FormatKind(str, Enum):
    """Text formats with a compress/decompress codec."""

    TYPESCRIPT = "typescript"
    HTML = "html"
    CSS = "css"
    JSON = "json"


@dataclasses.dataclass(frozen=True, slots=True)
class CompressionResult:
    """Compressed text together with its token savings."""

    text: str                  # the compressed text
    format: FormatKind         # format the text was compressed as
    stats: CompressionStats    # token comparison against the input

    def __str__(self) -> str:
        return self.text


_CODECS: dict[FormatKind, Codec] = {
    FormatKind.TYPESCRIPT: TYPESCRIPT_CODEC,
    FormatKind.HTML: HTML_CODEC,
    FormatKind.CSS: CSS_CODEC,
    FormatKind.JSON: JSON_CODEC,
}

_SUFFIX_FORMATS: dict[str, FormatKind] = {
    ".ts": FormatKind.TYPESCRIPT,
    ".tsx": FormatKind.TYPESCRIPT,
    ".js": FormatKind.TYPESCRIPT,
    ".jsx": FormatKind.TYPESCRIPT,
    ".mjs": FormatKind.TYPESCRIPT,
    ".cjs": FormatKind.TYPESCRIPT,
    ".html": FormatKind.HTML,
    ".htm": FormatKind.HTML,
    ".css": FormatKind.CSS,
    ".json": FormatKind.JSON,
}


def to_format(fmt: FormatKind | str) -> FormatKind:
    """Coerce a format name such as ``"css"`` to a :class:`FormatKind`.

    Raises:
        ValueError: If ``fmt`` is not a supported format.
    """
    if isinstance(fmt, FormatKind):
        return fmt
    try:
        return FormatKind(fmt.lower())
    except (ValueError, AttributeError):
        supported = ", ".join(kind.value for kind in FormatKind)
        raise ValueError(f"Unsupported format '{fmt}', expected one of: {supported}") from None


def get_codec(fmt: FormatKind | str) -> Codec:
    """Return the codec that handles ``fmt``."""
    return _CODECS[to_format(fmt)]


def compress(text: str, fmt: FormatKind | str) -> str:
    """Remove comments and redundant whitespace from ``text``.

    Args:
        text: Source text in the given format.
        fmt: One of ``typescript``, ``html``, ``css`` or ``json``.

    Returns:
        The compressed text. JSON that fails to parse is returned unchanged.

    Raises:
        ValueError: If ``fmt`` is not a supported format.
    """
    return get_codec(fmt).compress(text)


def decompress(text: str, fmt: FormatKind | str) -> str:
    """Re-expand compressed ``text`` into an indented, readable layout.

    This is a best-effort reflow, not an inverse of :func:`compress`: original
    comments and indentation are not recovered.

    Raises:
        ValueError: If ``fmt`` is not a supported format.
    """
    return get_codec(fmt).decompress(text)


def compress_with_stats(text: str, fmt: FormatKind | str) -> CompressionResult:
    """Compress ``text`` and compare estimated token counts before and after.

    Raises:
        ValueError: If ``fmt`` is not a supported format.
    """
    kind = to_format(fmt)
    compressed = _CODECS[kind].compress(text)
    stats = compute_stats(text, compressed)
    logger.debug(
        "Compressed %s: %d -> %d tokens (%.1f%% saved)",
        kind.value,
        stats.original_tokens,
        stats.compressed_tokens,
        stats.saved_percentage,
    )
    return CompressionResult(text=compressed, format=kind, stats=stats)


def format_for_path(path: str | Path) -> FormatKind:
    """Infer the format of a file from its suffix.

    Raises:
        ValueError: If the suffix does not map to a supported format.
    """
    suffix = Path(path).suffix.lower()
    try:
        return _SUFFIX_FORMATS[suffix]
    except KeyError:
        raise ValueError(f"Cannot infer format from file suffix '{suffix}'") from None


def compress_file(
    file_path: str | Path,
    fmt: FormatKind | str | None = None,
    encoding: str = "utf-8",
) -> CompressionResult:
    """Compress the contents of a file.

    Args:
        file_path: Path to the file to compress.
        fmt: Format of the file; inferred from the suffix when omitted.
        encoding: File encoding (default: utf-8).

    Raises:
        ValueError: If the format is unsupported or cannot be inferred.
        FileNotFoundError: If the file does not exist.
    """
    kind = to_format(fmt) if fmt is not None else format_for_path(file_path)
    text = Path(file_path).read_text(encoding=encoding)
    return compress_with_stats(text, kind)


def decompress_file(
    file_path: str | Path,
    fmt: FormatKind | str | None = None,
    encoding: str = "utf-8",
) -> str:
    """Decompress the contents of a file; see :func:`compress_file`."""
    kind = to_format(fmt) if fmt is not None else format_for_path(file_path)
    text = Path(file_path).read_text(encoding=encoding)
    return decompress(text, kind)

"""Code Compressor - Strip and restore whitespace and comments in code to save tokens."""

from code_compressor.compressor import (
    CompressionResult,
    FormatKind,
    compress,
    compress_file,
    compress_with_stats,
    decompress,
    decompress_file,
    format_for_path,
    get_codec,
    to_format,
)
from code_compressor.formats import BLOCK_TAGS, Codec
from code_compressor.reindent import reindent
from code_compressor.samples import SAMPLES, get_sample
from code_compressor.session import Session
from code_compressor.stats import CompressionStats, compute_stats, estimate_tokens

__all__ = [
    "compress",
    "decompress",
    "compress_with_stats",
    "compress_file",
    "decompress_file",
    "estimate_tokens",
    "compute_stats",
    "format_for_path",
    "get_codec",
    "to_format",
    "get_sample",
    "reindent",
    "Codec",
    "CompressionResult",
    "CompressionStats",
    "FormatKind",
    "Session",
    "SAMPLES",
    "BLOCK_TAGS",
]

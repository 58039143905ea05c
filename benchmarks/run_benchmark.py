#!/usr/bin/env python3
"""
Benchmark suite for code-compressor.

Measures character and token savings plus timing for every format, using the
built-in sample documents and any corpus files whose suffix maps to a format.

Usage:
    python benchmarks/run_benchmark.py                 # samples only
    python benchmarks/run_benchmark.py --corpus DIR    # also .ts/.html/.css/.json files in DIR
    python benchmarks/run_benchmark.py --tokens        # include real token counts (requires tiktoken)
    python benchmarks/run_benchmark.py --output results.json  # save to file
    python benchmarks/run_benchmark.py --iterations 20  # average over 20 runs
"""

from __future__ import annotations

import argparse
import json
import platform
import statistics
import sys
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path

# Ensure the src package is importable when running from repo root.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_PROJECT_ROOT / "src"))

from code_compressor import SAMPLES, FormatKind, compress, compute_stats, format_for_path  # noqa: E402


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class DocumentResult:
    """Benchmark result for a single document."""

    name: str
    format: str
    original_chars: int
    compressed_chars: int
    original_tokens: int
    compressed_tokens: int
    saved_percentage: float
    mean_time_ms: float
    median_time_ms: float
    min_time_ms: float
    max_time_ms: float
    real_original_tokens: int | None = None
    real_compressed_tokens: int | None = None
    real_saved_percentage: float | None = None


@dataclass(slots=True)
class BenchmarkReport:
    """Full benchmark report."""

    timestamp: str
    python_version: str
    platform: str
    iterations: int
    documents: list[DocumentResult] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Token counting (optional)
# ---------------------------------------------------------------------------

_tiktoken_encoding = None  # lazy singleton


def _try_load_tiktoken() -> bool:
    """Attempt to load tiktoken; return True if available."""
    global _tiktoken_encoding  # noqa: PLW0603
    try:
        import tiktoken  # type: ignore[import-untyped]

        _tiktoken_encoding = tiktoken.get_encoding("cl100k_base")
        return True
    except (ImportError, Exception):
        return False


def _count_tokens(text: str) -> int | None:
    """Count tokens using tiktoken if available."""
    if _tiktoken_encoding is None:
        return None
    return len(_tiktoken_encoding.encode(text))


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

_SEP = "-" * 110
_HEADER_FMT = "  {:<28s} {:<10s} {:>8s} {:>8s} {:>8s} {:>8s} {:>8s} {:>10s}"
_ROW_FMT = "  {:<28s} {:<10s} {:>8,d} {:>8,d} {:>8,d} {:>8,d} {:>7.1f}% {:>8.3f}ms"
_TOKEN_HEADER_FMT = " {:>10s} {:>10s} {:>8s}"
_TOKEN_ROW_FMT = " {:>10s} {:>10s} {:>7.1f}%"


def _print_table_header(*, tokens: bool) -> None:
    header = _HEADER_FMT.format(
        "Document", "Format", "Orig", "Comp", "Orig Est", "Comp Est", "Saved", "Mean(ms)"
    )
    if tokens:
        header += _TOKEN_HEADER_FMT.format("Orig Tok", "Comp Tok", "Tok Sav")
    print(header)


def _print_table_row(r: DocumentResult, *, tokens: bool) -> None:
    row = _ROW_FMT.format(
        r.name[:28],
        r.format,
        r.original_chars,
        r.compressed_chars,
        r.original_tokens,
        r.compressed_tokens,
        r.saved_percentage,
        r.mean_time_ms,
    )
    if tokens and r.real_original_tokens is not None and r.real_compressed_tokens is not None:
        row += _TOKEN_ROW_FMT.format(
            f"{r.real_original_tokens:,d}",
            f"{r.real_compressed_tokens:,d}",
            r.real_saved_percentage or 0.0,
        )
    elif tokens:
        row += " {:>10s} {:>10s} {:>8s}".format("n/a", "n/a", "n/a")
    print(row)


# ---------------------------------------------------------------------------
# Core benchmark logic
# ---------------------------------------------------------------------------


def benchmark_document(
    name: str,
    text: str,
    fmt: FormatKind,
    *,
    iterations: int = 10,
    count_tokens: bool = False,
) -> DocumentResult:
    """Compress one document repeatedly and return its result."""
    timings: list[float] = []
    compressed = ""

    for _ in range(iterations):
        t0 = time.perf_counter()
        compressed = compress(text, fmt)
        t1 = time.perf_counter()
        timings.append((t1 - t0) * 1000)  # ms

    stats = compute_stats(text, compressed)
    result = DocumentResult(
        name=name,
        format=fmt.value,
        original_chars=len(text),
        compressed_chars=len(compressed),
        original_tokens=stats.original_tokens,
        compressed_tokens=stats.compressed_tokens,
        saved_percentage=stats.saved_percentage,
        mean_time_ms=statistics.mean(timings),
        median_time_ms=statistics.median(timings),
        min_time_ms=min(timings),
        max_time_ms=max(timings),
    )

    if count_tokens:
        result.real_original_tokens = _count_tokens(text)
        result.real_compressed_tokens = _count_tokens(compressed)
        if result.real_original_tokens and result.real_compressed_tokens is not None:
            result.real_saved_percentage = (
                (1.0 - result.real_compressed_tokens / result.real_original_tokens) * 100.0
            )

    return result


def _collect_documents(corpus_dir: Path | None) -> list[tuple[str, str, FormatKind]]:
    documents = [(f"sample.{fmt.value}", text, fmt) for fmt, text in SAMPLES.items()]
    if corpus_dir is None:
        return documents

    for fp in sorted(corpus_dir.iterdir()):
        if not fp.is_file():
            continue
        try:
            fmt = format_for_path(fp)
        except ValueError:
            continue
        documents.append((fp.name, fp.read_text(encoding="utf-8"), fmt))
    return documents


def run_benchmark(
    corpus_dir: Path | None = None,
    *,
    iterations: int = 10,
    count_tokens: bool = False,
    output_path: Path | None = None,
) -> BenchmarkReport:
    """Run the full benchmark over the samples and corpus files."""

    import datetime

    report = BenchmarkReport(
        timestamp=datetime.datetime.now(datetime.timezone.utc).isoformat(),
        python_version=platform.python_version(),
        platform=platform.platform(),
        iterations=iterations,
    )

    if corpus_dir is not None and not corpus_dir.is_dir():
        print(f"Corpus directory not found: {corpus_dir}")
        sys.exit(1)

    print(f"\ncode-compressor benchmark")
    print(f"Python {platform.python_version()} on {platform.platform()}")
    print(f"Iterations per document: {iterations}")
    if count_tokens:
        print("Token counting: ON (tiktoken cl100k_base)")
    print(_SEP)
    _print_table_header(tokens=count_tokens)

    for name, text, fmt in _collect_documents(corpus_dir):
        result = benchmark_document(
            name, text, fmt, iterations=iterations, count_tokens=count_tokens
        )
        report.documents.append(result)
        _print_table_row(result, tokens=count_tokens)

    # Summary per format
    print(f"\n{_SEP}")
    print("  PER-FORMAT SUMMARY")
    print(_SEP)

    for fmt in FormatKind:
        docs = [d for d in report.documents if d.format == fmt.value]
        if not docs:
            continue
        orig = sum(d.original_tokens for d in docs)
        comp = sum(d.compressed_tokens for d in docs)
        saved = (orig - comp) * 100 / orig if orig else 0.0
        print(
            f"  {fmt.value:<10s} {len(docs):>3d} docs  "
            f"{orig:>8,d} -> {comp:>8,d} est. tokens  ({saved:.1f}% saved)"
        )

    print()

    # Optionally write JSON
    if output_path is not None:
        report_dict = asdict(report)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(report_dict, indent=2), encoding="utf-8")
        print(f"  Results saved to {output_path}")
        print()

    return report


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Benchmark suite for code-compressor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--corpus",
        type=Path,
        default=None,
        help="Directory with .ts/.js/.html/.css/.json files to benchmark alongside the samples",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=10,
        help="Number of iterations per document to average timing (default: 10)",
    )
    parser.add_argument(
        "--tokens",
        action="store_true",
        help="Count tokens using tiktoken (must be installed separately)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Path to save JSON results (e.g. benchmarks/results.json)",
    )
    args = parser.parse_args()

    if args.tokens:
        if not _try_load_tiktoken():
            print("Warning: tiktoken not installed, token counting disabled.")
            print("Install with: pip install tiktoken")
            args.tokens = False

    run_benchmark(
        corpus_dir=args.corpus,
        iterations=args.iterations,
        count_tokens=args.tokens,
        output_path=args.output,
    )


if __name__ == "__main__":
    main()

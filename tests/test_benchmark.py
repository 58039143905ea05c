"""Tests for the benchmark script."""

import json

from benchmarks.run_benchmark import benchmark_document, run_benchmark
from code_compressor import SAMPLES, FormatKind


class TestBenchmark:
    def test_benchmark_document(self):
        result = benchmark_document("sample.css", SAMPLES[FormatKind.CSS], FormatKind.CSS, iterations=2)
        assert result.format == "css"
        assert result.compressed_chars < result.original_chars
        assert result.saved_percentage > 0
        assert result.real_original_tokens is None

    def test_run_benchmark_with_corpus(self, tmp_path, capsys):
        corpus = tmp_path / "corpus"
        corpus.mkdir()
        (corpus / "extra.json").write_text('{\n  "a": [1, 2]\n}', encoding="utf-8")
        (corpus / "notes.txt").write_text("ignored", encoding="utf-8")
        output = tmp_path / "out" / "results.json"

        report = run_benchmark(corpus, iterations=1, output_path=output)

        names = [d.name for d in report.documents]
        assert "extra.json" in names
        assert "notes.txt" not in names
        assert len(names) == len(SAMPLES) + 1
        saved = json.loads(output.read_text(encoding="utf-8"))
        assert len(saved["documents"]) == len(names)
        assert "PER-FORMAT SUMMARY" in capsys.readouterr().out

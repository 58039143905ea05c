"""Caller-held state for an interactive compress/decompress workflow.

A :class:`Session` is an immutable value. Each transition returns a new
session, so the engine never keeps state between calls; whoever drives the
workflow (a UI, a CLI, a request handler) owns the current session.
"""

from __future__ import annotations

import dataclasses

from code_compressor.compressor import FormatKind, compress_with_stats, decompress, to_format
from code_compressor.samples import get_sample
from code_compressor.stats import CompressionStats


@dataclasses.dataclass(frozen=True, slots=True)
class Session:
    """Input text, output text, active format and the latest stats."""

    input_text: str = ""
    output_text: str = ""
    format: FormatKind = FormatKind.TYPESCRIPT
    stats: CompressionStats | None = None   # only set right after compress()

    def __post_init__(self) -> None:
        object.__setattr__(self, "format", to_format(self.format))

    def with_format(self, fmt: FormatKind | str) -> Session:
        """Switch format; existing texts are kept as they are."""
        return dataclasses.replace(self, format=to_format(fmt))

    def with_input(self, text: str) -> Session:
        return dataclasses.replace(self, input_text=text)

    def compress(self) -> Session:
        """Compress the input into the output and record the savings.

        Raises:
            ValueError: If the input is blank.
        """
        if not self.input_text.strip():
            raise ValueError("Nothing to compress: input is empty")
        result = compress_with_stats(self.input_text, self.format)
        return dataclasses.replace(self, output_text=result.text, stats=result.stats)

    def decompress(self) -> Session:
        """Expand the output back into the input and drop the stats.

        Raises:
            ValueError: If the output is blank.
        """
        if not self.output_text.strip():
            raise ValueError("Nothing to decompress: output is empty")
        expanded = decompress(self.output_text, self.format)
        return dataclasses.replace(self, input_text=expanded, stats=None)

    def swap(self) -> Session:
        return dataclasses.replace(self, input_text=self.output_text, output_text=self.input_text)

    def clear(self) -> Session:
        return dataclasses.replace(self, input_text="", output_text="", stats=None)

    def load_example(self) -> Session:
        """Replace the input with the sample document of the current format."""
        return dataclasses.replace(self, input_text=get_sample(self.format))

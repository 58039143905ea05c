"""Format-specific compress/decompress rules.

Every lexical codec is an ordered tuple of ``(pattern, replacement)`` passes.
The order is significant: comments are removed before whitespace is collapsed,
and whitespace is collapsed before punctuation spacing is tightened, otherwise
comment fragments and doubled spaces leak into the output.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import math
import re
from collections.abc import Callable
from typing import Any

from code_compressor.reindent import reindent

logger = logging.getLogger(__name__)

Rewrite = tuple[re.Pattern[str], str]


@dataclasses.dataclass(frozen=True, slots=True)
class Codec:
    """A compress/decompress pair for one text format."""

    name: str
    compress: Callable[[str], str]
    decompress: Callable[[str], str]


def _rewrite(text: str, passes: tuple[Rewrite, ...]) -> str:
    for pattern, replacement in passes:
        text = pattern.sub(replacement, text)
    return text


# --- TypeScript / JavaScript ---

_TS_COMPRESS: tuple[Rewrite, ...] = (
    (re.compile(r"/\*[\s\S]*?\*/"), ""),          # block comments
    (re.compile(r"//.*"), ""),                    # line comments
    (re.compile(r"[ \t]+"), " "),
    (re.compile(r"\n\s*\n\s*\n"), "\n\n"),        # at most one blank line
    (re.compile(r":\s*\{\s*"), ":{"),
    (re.compile(r"\s*\}\s*;"), "};"),
    (re.compile(r"\[\s+"), "["),
    (re.compile(r"\s+\]"), "]"),
    (re.compile(r"\{\s+"), "{"),
    (re.compile(r"\s+\}"), "}"),
    (re.compile(r"\s*=>\s*"), "=>"),
    (re.compile(r"\s*:\s*"), ":"),
    (re.compile(r"\s*,\s*"), ","),
)

_TS_EXPAND: tuple[Rewrite, ...] = (
    (re.compile(r":\{"), ": {\n  "),
    (re.compile(r"\};"), "\n};\n"),
    (re.compile(r"\[(?=\S)"), "[ "),
    (re.compile(r"(?<=\S)\]"), " ]"),
    (re.compile(r"=>"), " => "),
    (re.compile(r",(?=\S)"), ", "),
)


def compress_typescript(code: str) -> str:
    """Strip comments and redundant whitespace from TypeScript-like source."""
    return _rewrite(code, _TS_COMPRESS).strip()


def decompress_typescript(code: str) -> str:
    """Re-space compressed source and indent it by brace balance.

    The result is readable, not the original: indentation comes only from
    ``{``/``}`` counts, one level per line at most.
    """
    expanded = _rewrite(code, _TS_EXPAND)
    return reindent(
        expanded.split("\n"),
        closes=lambda line: "}" in line,
        opens=lambda line: "{" in line,
    )


# --- HTML ---

# Block-level tags that get their own lines. Other tags stay inline.
BLOCK_TAGS: tuple[str, ...] = ("div", "section", "article", "header", "footer", "main")

_BLOCK_NAMES = "|".join(BLOCK_TAGS)
_BLOCK_OPEN_START = rf"<(?:{_BLOCK_NAMES})(?=[\s/>])"
_BLOCK_CLOSE = rf"</(?:{_BLOCK_NAMES})\s*>"

_HTML_COMPRESS: tuple[Rewrite, ...] = (
    (re.compile(r"<!--[\s\S]*?-->"), ""),
    (re.compile(r">\s+<"), "><"),
    (re.compile(r"\s{2,}"), " "),
    (re.compile(r'\s*=\s*"'), '="'),
    (re.compile(r'"\s+'), '" '),
    (re.compile(rf"\s*({_BLOCK_OPEN_START})"), r"\n\1"),
    (re.compile(rf"({_BLOCK_CLOSE})\s*"), r"\1\n"),
)

_HTML_EXPAND: tuple[Rewrite, ...] = (
    (re.compile(rf"({_BLOCK_OPEN_START}[^>]*>)"), r"\1\n  "),
    (re.compile(rf"({_BLOCK_CLOSE})"), r"\n\1"),
)


def _html_closes(line: str) -> bool:
    return line.startswith("</")


def _html_opens(line: str) -> bool:
    # Self-closing tags and lines holding their own closing tag keep the depth.
    return (
        line.startswith("<")
        and not line.startswith("</")
        and not line.endswith("/>")
        and "</" not in line
    )


def compress_html(code: str) -> str:
    """Strip comments and inter-tag whitespace from HTML.

    Opening and closing tags listed in ``BLOCK_TAGS`` are kept on lines of
    their own; everything else is packed together.
    """
    return _rewrite(code, _HTML_COMPRESS).strip()


def decompress_html(code: str) -> str:
    """Break HTML around block-level tags and indent it by tag balance."""
    expanded = _rewrite(code, _HTML_EXPAND)
    return reindent(expanded.split("\n"), closes=_html_closes, opens=_html_opens)


# --- CSS ---

_CSS_COMPRESS: tuple[Rewrite, ...] = (
    (re.compile(r"/\*[\s\S]*?\*/"), ""),
    (re.compile(r"\s*\{\s*"), "{"),
    (re.compile(r"\s*\}\s*"), "}"),
    (re.compile(r"\s*:\s*"), ":"),
    (re.compile(r"\s*;\s*"), ";"),
    (re.compile(r"\s{2,}"), " "),
    (re.compile(r"\}(?!\s*\Z)"), "}\n"),          # one rule per line
)

_CSS_EXPAND: tuple[Rewrite, ...] = (
    (re.compile(r"\{"), " {\n  "),
    (re.compile(r"\}"), "\n}\n"),
    (re.compile(r";(?!\Z)"), ";\n  "),
    (re.compile(r":"), ": "),
    (re.compile(r"\n{3,}"), "\n\n"),
)


def compress_css(code: str) -> str:
    """Minify a stylesheet down to one line per rule."""
    return _rewrite(code, _CSS_COMPRESS).strip()


def decompress_css(code: str) -> str:
    """Expand a minified stylesheet to one declaration per line."""
    return _rewrite(code, _CSS_EXPAND).strip()


# --- JSON ---

@dataclasses.dataclass(frozen=True, slots=True)
class _ParseResult:
    ok: bool
    value: Any = None


# String literals are matched first so that brackets inside them are skipped.
_JSON_ARRAY_BREAKS_RE = re.compile(r'"(?:[^"\\]|\\.)*"|\[\{|\}\]|\},\{')
_JSON_ARRAY_BREAKS = {"[{": "[\n{", "}]": "}\n]", "},{": "},\n{"}


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def _finite_float(literal: str) -> float:
    # Overflowing literals such as 1e400 parse to inf, which has no JSON form.
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {literal}")
    return value


def _parse_json(text: str) -> _ParseResult:
    try:
        value = json.loads(text, parse_float=_finite_float, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        logger.debug("Input is not valid JSON, leaving it unchanged: %s", e)
        return _ParseResult(ok=False)
    return _ParseResult(ok=True, value=value)


def _break_object_arrays(match: re.Match[str]) -> str:
    token = match.group(0)
    return _JSON_ARRAY_BREAKS.get(token, token)


def compress_json(code: str) -> str:
    """Minify a JSON document, keeping each object of an array on its own line.

    Text that does not parse as JSON is returned unchanged.
    """
    parsed = _parse_json(code)
    if not parsed.ok:
        return code
    minified = json.dumps(parsed.value, separators=(",", ":"), ensure_ascii=False)
    return _JSON_ARRAY_BREAKS_RE.sub(_break_object_arrays, minified)


def decompress_json(code: str) -> str:
    """Pretty-print a JSON document with 2-space indentation.

    Text that does not parse as JSON is returned unchanged.
    """
    parsed = _parse_json(code)
    if not parsed.ok:
        return code
    return json.dumps(parsed.value, indent=2, ensure_ascii=False)


TYPESCRIPT_CODEC = Codec("typescript", compress_typescript, decompress_typescript)
HTML_CODEC = Codec("html", compress_html, decompress_html)
CSS_CODEC = Codec("css", compress_css, decompress_css)
JSON_CODEC = Codec("json", compress_json, decompress_json)

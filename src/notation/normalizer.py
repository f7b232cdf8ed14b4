from __future__ import annotations

import logging
import re
from typing import Sequence

from .contracts import DocumentRole, MissingTranscriptionError

logger = logging.getLogger(__name__)

# Comparison operators as Seshat spells them in LaTeX.
OPERATORS: tuple[str, ...] = ("=", r"\lt", r"\gt", r"\leq", r"\geq")

_OPERATOR_ALT = "|".join(re.escape(op) for op in OPERATORS)

_LATEX_LINE_RE = re.compile(r"LaTeX:\s*(.*)")
# Seshat spells a comma as a space-delimited COMMA token.
_COMMA_TOKEN_RE = re.compile(r" COMMA ")

# operator _{ \sum ... } | operator _{ \{ ... \} [3] }
_HINT_RE = re.compile(
    r"(?P<op>" + _OPERATOR_ALT + r")_\{"
    r"(?:(?P<sum>\\sum\s*.*?)|\\\{(?P<set>.+?)\\\}3?)"
    r"\}"
)

_TRAILING_MARKER_RE = re.compile(r"3$")
_EQ_UNDERSCORE_RE = re.compile(r"=_")
_DOUBLE_BRACE_RE = re.compile(r"=\{\\\{(.+?)\\\}\}")
_UNDERSCORE_BEFORE_OP_RE = re.compile(r"_(" + _OPERATOR_ALT + r")")


def extract_latex_expression(raw: str) -> str:
    """
    Return the expression printed after the `LaTeX:` marker, trimmed.
    """

    match = _LATEX_LINE_RE.search(raw)
    if match is None:
        raise MissingTranscriptionError("Recognizer output has no 'LaTeX:' line")
    return match.group(1).strip()


def unescape_commas(expr: str) -> str:
    return _COMMA_TOKEN_RE.sub(", ", expr)


def correct_hint(expr: str) -> str:
    """
    Rewrite `op_{\\sum ...}` / `op_{\\{...\\}3}` into `op\\{payload\\}`.

    The rewritten form replaces the whole expression. Text that does not
    match the grammar is returned unchanged.
    """

    match = _HINT_RE.search(expr)
    if match is None:
        logger.debug("Hint expression left as-is: %r", expr)
        return expr

    if match.group("set") is not None:
        payload = match.group("set").strip()
    else:
        payload = _TRAILING_MARKER_RE.sub("", match.group("sum")).strip()

    return f"{match.group('op')}\\{{{payload}\\}}"


def cleanup_expression(expr: str) -> str:
    """
    Remove underscore/brace leftovers the recognizer and the hint rewrite
    can produce around comparison operators.
    """

    expr = _EQ_UNDERSCORE_RE.sub("=", expr)
    expr = _DOUBLE_BRACE_RE.sub(r"={\1}", expr)
    return _UNDERSCORE_BEFORE_OP_RE.sub(r"\1", expr)


def normalize_transcriptions(
    raw_results: Sequence[str], roles: Sequence[DocumentRole]
) -> list[str]:
    """
    Turn ordered raw recognizer outputs into the corrected expressions.

    `roles[i]` tags `raw_results[i]`; only HINT entries get the hint rewrite,
    every entry gets the final cleanup.
    """

    if len(raw_results) != len(roles):
        raise ValueError(
            f"Expected one role per result, got {len(roles)} roles for {len(raw_results)} results"
        )

    expressions = [unescape_commas(extract_latex_expression(raw)) for raw in raw_results]
    corrected = [
        correct_hint(expr) if role == DocumentRole.HINT else expr
        for expr, role in zip(expressions, roles)
    ]
    return [cleanup_expression(expr) for expr in corrected]

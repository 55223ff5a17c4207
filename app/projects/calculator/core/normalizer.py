"""
Clean keystroke-accumulated text into an arithmetic expression the evaluator
can parse.
"""
import re

from app.projects.calculator.core.constants import OPERATORS

_PERCENT_RE = re.compile(r"(\d+(?:\.\d+)?)%")
_OPERATOR_RUN_RE = re.compile(r"[+\-*/]{2,}")
_LEADING_STRIPPED = "+*/"


def normalize_percent(expr: str) -> str:
    """Rewrite every `<number>%` as `(<number>/100)`."""
    return _PERCENT_RE.sub(r"(\1/100)", expr)


def sanitize_expression(expr: str) -> str:
    """
    Collapse operator runs to their last operator and drop leading
    `+`, `*` and `/`. A leading `-` is kept for negative numbers.
    """
    expr = expr.strip()
    expr = _OPERATOR_RUN_RE.sub(lambda m: m.group(0)[-1], expr)
    while expr and expr[0] in _LEADING_STRIPPED:
        expr = expr[1:].lstrip()
    return expr


def normalize(raw: str) -> str:
    """Percent rewriting followed by operator sanitizing. Never raises."""
    if not raw:
        return ""
    return sanitize_expression(normalize_percent(raw))


def ends_with_operator(expr: str) -> bool:
    return bool(expr) and expr[-1] in OPERATORS

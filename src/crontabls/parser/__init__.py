"""Crontab parsing with line/character fidelity."""

from crontabls.parser.grammar import classify
from crontabls.parser.tokenizer import CrontabTokenizer, split_lines, tokenize
from crontabls.parser.validator import DEFAULT_DIAGNOSTIC_SOURCE, CrontabValidator

__all__ = [
    "DEFAULT_DIAGNOSTIC_SOURCE",
    "CrontabTokenizer",
    "CrontabValidator",
    "classify",
    "split_lines",
    "tokenize",
]

"""Shared test fixtures for the crontab language server."""

from __future__ import annotations

import pytest

from crontabls.parser.tokenizer import CrontabTokenizer
from crontabls.parser.validator import CrontabValidator
from crontabls.service.document_store import DocumentStore


@pytest.fixture
def tokenizer() -> CrontabTokenizer:
    return CrontabTokenizer()


@pytest.fixture
def validator() -> CrontabValidator:
    return CrontabValidator()


@pytest.fixture
def store() -> DocumentStore:
    """A fresh, empty DocumentStore (no state shared between tests)."""
    return DocumentStore()


SAMPLE_URI = "file:///etc/crontab"

SAMPLE_CRONTAB = """\
# nightly jobs
0 0 * * * /bin/backup.sh

*/15 9-17 * * 1-5 /usr/bin/poll --quiet
30 6 1,15 * * echo hello world
"""

BROKEN_CRONTAB = """\
60 0 * * * cmd
*/0 * * * * cmd
0 24 32-40 0 9 cmd
"""

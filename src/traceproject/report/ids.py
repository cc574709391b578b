"""Deterministic test identifiers.

A test id depends only on the owning file path and the test title, so the
same test keeps its id across synthesized runs and real results can be
joined to it.
"""

import hashlib

ID_HEX_LENGTH = 20
TITLE_SEPARATOR = "\x1e"
PROJECT_SCOPE = "[project=]"


def _sha1(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8", "surrogatepass")).hexdigest()


def file_id(path: str) -> str:
    return _sha1(path)[:ID_HEX_LENGTH]


def id_expression(path: str, title: str) -> str:
    return f"{PROJECT_SCOPE}{path}{TITLE_SEPARATOR}{title}"


def generate_test_id(path: str, title: str) -> str:
    """Return ``<file id>-<expression digest>`` for a test."""
    return f"{file_id(path)}-{_sha1(id_expression(path, title))[:ID_HEX_LENGTH]}"

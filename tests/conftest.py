import os
import sys

import pytest

TESTS_DIR = os.path.dirname(__file__)


def _ensure_src_on_path():
    repo_root = os.path.dirname(TESTS_DIR)
    src = os.path.join(repo_root, 'src')
    if src not in sys.path:
        sys.path.insert(0, src)


_ensure_src_on_path()


@pytest.fixture
def content_view_path():
    return os.path.join(TESTS_DIR, 'content_view.swift')


@pytest.fixture
def content_view_source(content_view_path):
    with open(content_view_path, 'r', encoding='utf-8') as f:
        return f.read()

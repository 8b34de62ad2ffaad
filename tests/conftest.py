import io

import pytest
from rich.console import Console

from TextSearch.preprocessing.preprocess import create_pipeline


@pytest.fixture
def pipeline():
    """Lowercasing pipeline without stop words."""
    return create_pipeline(stop_words=set())


@pytest.fixture
def corpus_dir(tmp_path):
    """Directory with the two-document cat/dog/bird corpus."""
    (tmp_path / "a.txt").write_text("cat dog cat", encoding="utf-8")
    (tmp_path / "b.txt").write_text("dog bird", encoding="utf-8")
    return tmp_path


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=500)

"""Usage examples in docstrings run as written."""

import doctest

import pytest

from mathflow import config, location
from mathflow.engine import core, lazy


@pytest.mark.parametrize("module", [config, location, core, lazy], ids=lambda m: m.__name__)
def test_docstring_examples(module) -> None:
    results = doctest.testmod(module)
    assert results.attempted > 0
    assert results.failed == 0

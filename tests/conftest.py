"""
Pytest configuration and shared fixtures for the srcdiag tests.
"""

import sys
import pytest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from srcdiag.shared.fileset import FileSet
from srcdiag.frontend.parser import SourceParser


# Small definition language used across the tests:
#   def a = 1;
#   use a;
TEST_GRAMMAR = r"""
start: item*

item: "def" NAME "=" NUMBER ";"   -> definition
    | "use" NAME ";"              -> reference

%import common.CNAME -> NAME
%import common.INT -> NUMBER
%import common.WS
%ignore WS
"""

SAMPLE_SOURCE = "def a = 1;\ndef b = 2;\nuse a;\n"


@pytest.fixture
def fileset():
    return FileSet()


@pytest.fixture(scope="session")
def grammar_text():
    return TEST_GRAMMAR


@pytest.fixture
def source_parser(fileset):
    """Fresh parser bound to the test's file set."""
    return SourceParser(TEST_GRAMMAR, fileset=fileset)


@pytest.fixture
def sample_tree(source_parser):
    return source_parser.parse(SAMPLE_SOURCE, "sample.src")

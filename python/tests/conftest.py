"""Pytest configuration and fixtures."""

import pytest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def sample_dictionary_content():
    """Sample OpenCorpora dictionary content."""
    return """1
КОТ\tсущ од,муж ед,им
КОТА\tсущ од,муж ед,род
КОТУ\tсущ од,муж ед,дат
КОТЫ\tсущ од,муж мн,им

2
МАМА\tСУЩ, од, жр, ед, им
МАМЫ\tСУЩ, од, жр, ед, род
МАМЫ\tСУЩ, од, жр, мн, им

3
МЫЛА\tгл несов,перех жр,ед,прош
МЫЛИ\tгл несов,перех мн,прош
"""


@pytest.fixture
def sample_dictionary_lines(sample_dictionary_content):
    """Sample dictionary as a list of lines."""
    return sample_dictionary_content.splitlines()


@pytest.fixture
def homograph_lines():
    """Same surface word in two groups that differ only in order."""
    return [
        "10",
        "СТАЛЬ\tсущ неод,жр ед,им",
        "СТАЛИ\tсущ неод,жр ед,род",
        "",
        "20",
        "СТАЛЬ\tгл сов,неперех ед,пов",
        "СТАЛИ\tгл сов,неперех мн,прош",
        "",
    ]

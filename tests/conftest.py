"""
Shared fixtures for fluent-xml tests
"""
from pathlib import Path
import textwrap

import pytest

from fluent_xml import from_file, from_string

EXAMPLES_ROOT = Path(__file__).resolve().parent / "content" / "examples"

DOGS_XML = "<dogs><dog name='Lander'>My Text</dog></dogs>"

STUFF_XML = """
<stuff>
    <more>
        <notThing>Ah ha! The first more has no thing!</notThing>
        <other>
          <whatever/>
        </other>
    </more>
    <thing>hi</thing>
    <more>
        <thing>more thing 1</thing>
        <thing>more thing 2</thing>
    </more>
    <other>
        <whatever>
            <thing>other thing 1</thing>
            <thing>other thing 2</thing>
        </whatever>
    </other>
</stuff>
"""

FIRST_STUFF_XML = """
<stuff>
    <thing>hi</thing>
    <more>
        <notThing>Ah ha! The first more has no thing!</notThing>
        <other>
          <whatever/>
        </other>
    </more>
    <more>
        <thing>more thing 1</thing>
        <thing>more thing 2</thing>
        <whatever>
            <thing>whatever thing 1</thing>
        </whatever>
    </more>
    <other>
        <whatever>
            <thing>other thing 1</thing>
            <thing>other thing 2</thing>
        </whatever>
    </other>
</stuff>
"""


def expected_xml(text: str) -> str:
    """Dedent a triple-quoted expectation and drop the leading newline"""
    return textwrap.dedent(text).strip()


def example(*parts: str) -> Path:
    return EXAMPLES_ROOT.joinpath(*parts)


@pytest.fixture
def csproj_doc():
    return from_file(example("ConsoleApp.csproj"))


@pytest.fixture
def dogs_doc():
    return from_string(DOGS_XML)


@pytest.fixture
def stuff_doc():
    return from_string(STUFF_XML)


@pytest.fixture
def first_stuff_doc():
    return from_string(FIRST_STUFF_XML)

from pathlib import Path

import pytest

from abioci.oci import Payload

TEST_DATA = Path(__file__).parent / "testdata"


@pytest.fixture
def testdata() -> Path:
    """Return the testdata dir for this module"""
    return TEST_DATA


@pytest.fixture
def payloads() -> list[Payload]:
    return [
        Payload("A.abi", b"a" * 100),
        Payload("B.abi", b"b" * 200),
    ]

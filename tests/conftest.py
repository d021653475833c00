from __future__ import annotations

import pytest

from skytrack.sink import RecordingSink


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()

from __future__ import annotations

import pytest

from builders import EventFactory


@pytest.fixture
def event() -> EventFactory:
    return EventFactory()

from __future__ import annotations

import pytest

from common.log_config import configure_logging


@pytest.fixture(autouse=True)
def quiet_logging():
    configure_logging(level="WARNING")

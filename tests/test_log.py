"""
Verbosity-gated logging tests
"""

import pytest
from loguru import logger

from etchnav.lib.log import LOG, state_connectToLogger, state_disconnectFromLogger
from etchnav.models import ProgramState


@pytest.fixture
def records():
    captured = []
    sink = logger.add(lambda message: captured.append(message.record), level="TRACE", format="{message}")
    yield captured
    logger.remove(sink)


class TestLOG:

    def test_silent_without_state(self, records):
        LOG("nobody listens", level=1)
        assert records == []

    def test_verbosity_gates_levels(self, records):
        token = state_connectToLogger(ProgramState(verbosity=2))
        try:
            LOG("progress", level=1)
            LOG("details", level=2)
            LOG("trace", level=3)
        finally:
            state_disconnectFromLogger(token)

        assert [record["message"] for record in records] == ["progress", "details"]
        assert [record["level"].name for record in records] == ["INFO", "DEBUG"]

    def test_disconnect_restores_silence(self, records):
        token = state_connectToLogger(ProgramState(verbosity=3))
        state_disconnectFromLogger(token)

        LOG("after disconnect", level=1)
        assert records == []

    def test_caller_is_recorded(self, records):
        token = state_connectToLogger(ProgramState(verbosity=1))
        try:
            LOG("from the test", level=1)
        finally:
            state_disconnectFromLogger(token)

        assert records[0]["function"] == "test_caller_is_recorded"

"""Tests for EventedDispatcher's terminal event bookkeeping."""

import pytest

from .conftest import FakeDispatcher, FakeStream


@pytest.fixture
def dispatcher():
    return FakeDispatcher(FakeStream("songA"), guild_id=1)


class TestEventedDispatcher:
    """At most one terminal event, and none after dispose."""

    def test_end_delivered_to_all_listeners(self, dispatcher):
        calls = []
        dispatcher.on_end(lambda: calls.append("a"))
        dispatcher.on_end(lambda: calls.append("b"))

        dispatcher.finish()

        assert calls == ["a", "b"]
        assert dispatcher.is_finished

    def test_error_delivered_with_exception(self, dispatcher):
        errors = []
        dispatcher.on_error(errors.append)
        failure = RuntimeError("boom")

        dispatcher.fail(failure)

        assert errors == [failure]

    def test_end_then_error_delivers_only_end(self, dispatcher):
        events = []
        dispatcher.on_end(lambda: events.append("end"))
        dispatcher.on_error(lambda e: events.append("error"))

        dispatcher.finish()
        dispatcher.fail(RuntimeError("late"))
        dispatcher.finish()

        assert events == ["end"]

    def test_no_events_after_dispose(self, dispatcher):
        events = []
        dispatcher.on_end(lambda: events.append("end"))

        dispatcher.dispose()
        dispatcher.finish()

        assert events == []
        assert dispatcher.is_disposed
        assert dispatcher.released

    def test_dispose_is_idempotent(self, dispatcher):
        dispatcher.dispose()
        dispatcher.released = False

        dispatcher.dispose()

        assert dispatcher.released is False

    def test_failing_listener_does_not_stop_others(self, dispatcher, caplog):
        calls = []

        def explode():
            raise ValueError("listener bug")

        dispatcher.on_end(explode)
        dispatcher.on_end(lambda: calls.append("ok"))

        dispatcher.finish()

        assert calls == ["ok"]
        assert "listener bug" in caplog.text

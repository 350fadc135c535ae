"""
測試請求排程器（防抖 + 單一在途請求）

不使用 wall-clock：FakeLoop 手動推進時間，FakeTransport 手動回應。
"""

import io

import pytest

from fakes import FakeLoop, FakeTransport
from phonocloud.scheduler import FetchState, RequestScheduler


class Recorder:
    def __init__(self):
        self.responses = []
        self.issued = []
        self.events = []

    def on_response(self, spelling, stream):
        self.responses.append((spelling, stream.read() if stream is not None else None))

    def on_issued(self, spelling):
        self.issued.append(spelling)


@pytest.fixture
def recorder():
    return Recorder()


def _make(transport, loop, recorder, **kwargs):
    return RequestScheduler(
        transport,
        url_builder=lambda spelling: f"http://cloud.test/?q={spelling}",
        on_response=recorder.on_response,
        on_issued=recorder.on_issued,
        delay_ms=100,
        loop=loop,
        on_event=recorder.events.append,
        **kwargs,
    )


class TestDebounce:
    def test_burst_collapses_into_last_spelling(self, transport, loop, recorder):
        scheduler = _make(transport, loop, recorder)
        for spelling in ["n", "ni", "nih", "niha", "nihao"]:
            scheduler.schedule(spelling)
            loop.advance(0.03)

        assert transport.requests == []
        loop.advance(0.2)

        assert [r.url for r in transport.requests] == ["http://cloud.test/?q=nihao"]
        assert recorder.issued == ["nihao"]

    def test_timer_fires_after_delay(self, transport, loop, recorder):
        scheduler = _make(transport, loop, recorder)
        scheduler.schedule("nihao")

        loop.advance(0.099)
        assert transport.requests == []
        assert scheduler.state is FetchState.DEBOUNCING
        assert scheduler.pending_spelling == "nihao"

        loop.advance(0.001)
        assert len(transport.requests) == 1
        assert scheduler.state is FetchState.IN_FLIGHT
        assert scheduler.in_flight_spelling == "nihao"
        assert not scheduler.has_pending_timer()

    def test_superseded_timer_firing_anyway_is_noop(self, transport, recorder):
        """底層取消失敗時，舊計時器仍會觸發，但不得發出請求"""
        loop = FakeLoop(honor_cancel=False)
        scheduler = _make(transport, loop, recorder)
        scheduler.schedule("ni")
        loop.advance(0.05)
        scheduler.schedule("nihao")

        loop.advance(0.5)
        assert [r.url for r in transport.requests] == ["http://cloud.test/?q=nihao"]

    def test_replacing_timer_emits_event(self, transport, loop, recorder):
        scheduler = _make(transport, loop, recorder)
        scheduler.schedule("ni")
        scheduler.schedule("nihao")

        assert {"type": "timer_superseded", "spelling": "ni"} in recorder.events
        assert len(loop.armed) == 1

    def test_delay_is_read_per_schedule(self, transport, loop, recorder):
        scheduler = _make(transport, loop, recorder)
        scheduler.delay_ms = 500
        scheduler.schedule("nihao")

        loop.advance(0.4)
        assert transport.requests == []
        loop.advance(0.1)
        assert len(transport.requests) == 1


class TestSingleFlight:
    def test_new_cycle_cancels_in_flight(self, transport, loop, recorder):
        scheduler = _make(transport, loop, recorder)
        scheduler.schedule("ni")
        loop.advance(0.1)
        first = transport.requests[0]

        scheduler.schedule("nihao")
        assert first.cancelled
        assert not scheduler.has_in_flight()

        loop.advance(0.1)
        assert transport.outstanding == [transport.requests[1]]

    def test_late_response_is_dropped(self, transport, loop, recorder):
        scheduler = _make(transport, loop, recorder)
        scheduler.schedule("ni")
        loop.advance(0.1)
        first = transport.requests[0]
        scheduler.schedule("nihao")
        loop.advance(0.1)
        second = transport.requests[1]

        transport.respond(second, "fresh")
        transport.respond(first, "stale")

        assert recorder.responses == [("nihao", b"fresh")]
        assert {"type": "response_discarded", "spelling": "ni", "reason": "stale_request"} in recorder.events

    def test_network_error_is_forwarded(self, transport, loop, recorder):
        scheduler = _make(transport, loop, recorder)
        scheduler.schedule("nihao")
        loop.advance(0.1)
        transport.respond(transport.requests[0], None)

        assert recorder.responses == [("nihao", None)]
        assert not scheduler.has_in_flight()

    def test_issue_now_skips_debounce(self, transport, loop, recorder):
        scheduler = _make(transport, loop, recorder)
        scheduler.schedule("ni")
        scheduler.issue_now("nihao")

        assert [r.url for r in transport.requests] == ["http://cloud.test/?q=nihao"]
        loop.advance(1.0)
        assert len(transport.requests) == 1

    def test_cancel_returns_to_idle(self, transport, loop, recorder):
        scheduler = _make(transport, loop, recorder)
        scheduler.schedule("ni")
        loop.advance(0.1)
        scheduler.schedule("nihao")
        scheduler.cancel()

        loop.advance(1.0)
        assert len(transport.requests) == 1
        assert transport.requests[0].cancelled
        assert scheduler.state is FetchState.IDLE

    def test_cancel_timer_keeps_in_flight(self, transport, loop, recorder):
        scheduler = _make(transport, loop, recorder)
        scheduler.schedule("ni")
        loop.advance(0.1)
        scheduler.issue_now("nihao")
        scheduler.cancel_timer()

        assert scheduler.in_flight_spelling == "nihao"
        assert scheduler.state is FetchState.IN_FLIGHT

    def test_cancel_timer_disarms_debounce(self, transport, loop, recorder):
        scheduler = _make(transport, loop, recorder)
        scheduler.schedule("nihao")
        scheduler.cancel_timer()

        loop.advance(1.0)
        assert transport.requests == []
        assert scheduler.state is FetchState.IDLE

    def test_finish_records_outcome_state(self, transport, loop, recorder):
        scheduler = _make(transport, loop, recorder)
        scheduler.schedule("nihao")
        loop.advance(0.1)
        transport.respond(transport.requests[0], "ok")
        scheduler.finish(FetchState.RESOLVED)

        assert scheduler.state is FetchState.RESOLVED


class TestReentrancy:
    def test_synchronous_transport(self, loop, recorder):
        class ImmediateTransport(FakeTransport):
            def issue_get(self, url, on_complete):
                request = super().issue_get(url, on_complete)
                on_complete(io.BytesIO(b"now"))
                return request

        transport = ImmediateTransport()
        scheduler = _make(transport, loop, recorder)
        scheduler.schedule("nihao")
        loop.advance(0.1)

        assert recorder.issued == ["nihao"]
        assert recorder.responses == [("nihao", b"now")]
        assert not scheduler.has_in_flight()

    def test_new_cycle_from_issue_hook_wins(self, transport, loop):
        """on_issued 中開始新週期時，舊請求不會送出"""
        issued = []
        holder = {}

        def on_issued(spelling):
            issued.append(spelling)
            if spelling == "ni":
                holder["scheduler"].schedule("nihao")

        scheduler = RequestScheduler(
            transport,
            url_builder=lambda s: s,
            on_response=lambda spelling, stream: None,
            on_issued=on_issued,
            delay_ms=100,
            loop=loop,
        )
        holder["scheduler"] = scheduler
        scheduler.schedule("ni")
        loop.advance(0.1)
        assert transport.requests == []
        assert scheduler.state is FetchState.DEBOUNCING

        loop.advance(0.1)
        assert [r.url for r in transport.requests] == ["nihao"]
        assert issued == ["ni", "nihao"]

from conftest import make_issue

from bugathon_app.core.clock import ManualClock
from bugathon_app.core.config import STORAGE_KEY, TIMER_DURATION_MINUTES, TIMER_KEY
from bugathon_app.core.errors import FetchError
from bugathon_app.core.session import DashboardSession
from bugathon_app.core.storage import MemoryStore


class ScriptedFetcher:
    """Returns queued payloads in order (repeating the last); exceptions are raised."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        item = self.responses[min(self.calls, len(self.responses)) - 1]
        if isinstance(item, Exception):
            raise item
        return item


class Recorder:
    def __init__(self):
        self.renders = []
        self.notifications = []

    def render(self, snapshot):
        self.renders.append(snapshot)

    def notify(self, transitions):
        self.notifications.append(list(transitions))


def _session(fetcher, store=None, clock=None):
    rec = Recorder()
    session = DashboardSession(
        store if store is not None else MemoryStore(),
        clock or ManualClock(1_000),
        fetcher,
        render=rec.render,
        notify=rec.notify,
    )
    return session, rec


def _payload(*issues):
    return {"total": len(issues), "issues": list(issues)}


def test_identical_payload_renders_once():
    payload = _payload(make_issue("A", "Open"))
    session, rec = _session(ScriptedFetcher(payload))
    session.start()
    assert len(rec.renders) == 1
    assert rec.renders[0].total == 1
    assert session.poll() is False
    assert session.poll() is False
    assert len(rec.renders) == 1


def test_start_then_poll_same_payload_renders_once():
    payload = _payload(make_issue("A", "Open"), make_issue("B", "Done"))
    renders = []
    session = DashboardSession(MemoryStore(), ManualClock(0), lambda: payload, render=renders.append)
    session.start()
    session.poll()
    assert len(renders) == 1


def test_transition_notified_after_baseline():
    fetcher = ScriptedFetcher(
        _payload(make_issue("A", "Open"), make_issue("B", "Open")),
        _payload(make_issue("A", "Done"), make_issue("B", "Open")),
    )
    session, rec = _session(fetcher)
    session.start()
    assert rec.notifications == []
    assert session.poll() is True
    assert [[t.key for t in batch] for batch in rec.notifications] == [["A"]]
    assert session.snapshot.done == 1


def test_cold_start_renders_cache_before_fetch():
    store = MemoryStore({STORAGE_KEY: _payload(make_issue("A", "Done"), make_issue("B", "Open"))})
    session, rec = _session(ScriptedFetcher(FetchError("proxy down", status_code=502)), store=store)
    session.start()
    assert len(rec.renders) == 1
    assert rec.renders[0].total == 2
    assert session.last_error == "proxy down"


def test_cold_start_without_cache_or_data_does_not_render():
    session, rec = _session(ScriptedFetcher(FetchError("offline")))
    session.start()
    assert rec.renders == []
    assert session.snapshot.total == 0
    assert session.snapshot.status_breakdown == {}
    assert session.last_error == "offline"


def test_poll_if_due_skips_fetch_right_after_start():
    clock = ManualClock(0)
    fetcher = ScriptedFetcher(_payload(make_issue("A", "Open")), _payload(make_issue("A", "Done")))
    session, rec = _session(fetcher, clock=clock)
    session.start()
    assert fetcher.calls == 1
    assert session.poll_if_due() is False
    assert fetcher.calls == 1
    clock.advance(session.settings.polling_interval_ms)
    assert session.poll_if_due() is True
    assert fetcher.calls == 2
    assert [[t.key for t in batch] for batch in rec.notifications] == [["A"]]


def test_poll_if_due_counts_failed_fetches():
    clock = ManualClock(0)
    fetcher = ScriptedFetcher(FetchError("offline"), _payload(make_issue("A", "Open")))
    session, _ = _session(fetcher, clock=clock)
    session.start()
    clock.advance(session.settings.polling_interval_ms // 2 - 1)
    assert session.poll_if_due() is False
    assert fetcher.calls == 1
    clock.advance(1)
    assert session.poll_if_due() is True
    assert fetcher.calls == 2


def test_fetch_error_keeps_snapshot_and_retries():
    fetcher = ScriptedFetcher(
        _payload(make_issue("A", "Open")),
        FetchError("timeout"),
        _payload(make_issue("A", "Done")),
    )
    session, rec = _session(fetcher)
    session.start()
    before = session.snapshot
    assert session.poll() is False
    assert session.snapshot is before
    assert session.last_error == "timeout"
    assert session.poll() is True
    assert session.last_error is None
    assert [t.key for t in rec.notifications[0]] == ["A"]


def test_payload_is_persisted():
    payload = _payload(make_issue("A", "Open"))
    store = MemoryStore()
    session, _ = _session(ScriptedFetcher(payload), store=store)
    session.start()
    assert store.load(STORAGE_KEY) == payload


def test_stopped_session_ignores_polls():
    session, rec = _session(ScriptedFetcher(_payload(make_issue("A", "Open"))))
    session.start()
    renders = len(rec.renders)
    session.stop()
    assert session.poll() is False
    assert session.tick() is False
    assert len(rec.renders) == renders


def test_result_arriving_after_stop_is_discarded():
    calls = []

    def fetch():
        calls.append(1)
        if len(calls) == 1:
            return _payload(make_issue("A", "Open"))
        # torn down while the request was in flight
        session.stop()
        return _payload(make_issue("A", "Done"))

    session, rec = _session(fetch)
    session.start()
    renders = len(rec.renders)
    assert session.poll() is False
    assert session.snapshot.done == 0
    assert len(rec.renders) == renders
    assert rec.notifications == []



def test_tick_emits_times_up_once():
    clock = ManualClock(0)
    session, rec = _session(ScriptedFetcher(_payload()), clock=clock)
    session.start()
    session.toggle_timer()
    clock.advance(TIMER_DURATION_MINUTES * 60_000)
    assert session.tick() is True
    assert session.tick() is False
    assert [[t.key for t in batch] for batch in rec.notifications] == [["Timer"]]


def test_timer_state_shared_between_sessions():
    store = MemoryStore()
    clock = ManualClock(0)
    first, _ = _session(ScriptedFetcher(_payload()), store=store, clock=clock)
    second, _ = _session(ScriptedFetcher(_payload()), store=store, clock=clock)
    first.start()
    second.start()
    first.toggle_timer()
    clock.advance(3000)
    second.tick()
    assert second.timer.is_running
    second.toggle_timer()
    first.tick()
    assert not first.timer.is_running
    assert store.load(TIMER_KEY)["remaining"] == TIMER_DURATION_MINUTES * 60_000 - 3000


def test_each_session_keeps_its_own_baseline():
    store = MemoryStore()
    first, first_rec = _session(ScriptedFetcher(_payload(make_issue("A", "Open"))), store=store)
    first.start()
    second, second_rec = _session(ScriptedFetcher(_payload(make_issue("A", "Done"))), store=store)
    second.start()
    assert second_rec.notifications == []
    assert first.detector.known == {"A": "Open"}
    assert second.detector.known == {"A": "Done"}

from mintadmin.models.stack import StackEvent
from mintadmin.services.event_streamer import EventStreamer
from tests.fakes import START, FakeDescribeStackEvents, event


def test_emits_oldest_first(sink):
    events = FakeDescribeStackEvents(
        [{"StackEvents": [event("e3", 30), event("e2", 20), event("e1", 10)]}]
    )
    streamer = EventStreamer(events)

    emitted = streamer.stream_new("mint-admin", START, sink)

    assert [e.event_id for e in emitted] == ["e1", "e2", "e3"]
    lines = sink.getvalue().splitlines()
    assert [line.split()[0] for line in lines] == ["e1", "e2", "e3"]


def test_event_seen_twice_is_emitted_once(sink):
    events = FakeDescribeStackEvents(
        [
            {"StackEvents": [event("e1", 10)]},
            {"StackEvents": [event("e2", 20), event("e1", 10)]},
        ]
    )
    streamer = EventStreamer(events)

    streamer.stream_new("mint-admin", START, sink)
    second = streamer.stream_new("mint-admin", START, sink)

    assert [e.event_id for e in second] == ["e2"]
    assert sink.getvalue().count("e1 ") == 1
    assert streamer.seen == {"e1", "e2"}


def test_events_before_start_are_never_emitted(sink):
    events = FakeDescribeStackEvents(
        [{"StackEvents": [event("new", 5), event("at-start", 0), event("old", -3600)]}]
    )
    streamer = EventStreamer(events)

    emitted = streamer.stream_new("mint-admin", START, sink)

    assert [e.event_id for e in emitted] == ["at-start", "new"]
    assert "old" not in sink.getvalue()
    assert "old" not in streamer.seen


def test_no_sink_still_tracks_seen():
    events = FakeDescribeStackEvents([{"StackEvents": [event("e1", 10)]}])
    streamer = EventStreamer(events)

    emitted = streamer.stream_new("mint-admin", START, None)

    assert [e.event_id for e in emitted] == ["e1"]
    assert streamer.stream_new("mint-admin", START, None) == []


def test_format_line():
    ev = StackEvent.from_dict(
        event("e1", 1, status="CREATE_FAILED", logical_id="InstanceRole", reason="Access denied")
    )

    line = ev.format_line()

    assert line.startswith("e1  InstanceRole")
    assert "CREATE_FAILED" in line
    assert line.endswith("Access denied")
    assert line.index("CREATE_FAILED") == len("e1  ") + 40 + 2


def test_any_object_with_write_is_a_sink():
    class LineCollector:
        def __init__(self):
            self.lines = []

        def write(self, text):
            self.lines.append(text)

    events = FakeDescribeStackEvents([{"StackEvents": [event("e2", 2), event("e1", 1)]}])
    collector = LineCollector()

    EventStreamer(events).stream_new("mint-admin", START, collector)

    assert [line.split()[0] for line in collector.lines] == ["e1", "e2"]
    assert all(line.endswith("\n") for line in collector.lines)

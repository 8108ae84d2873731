"""
Stack Event Streamer

Surfaces each new stack event exactly once, oldest first.
"""

from datetime import datetime
from typing import List, Optional, Set

from mintadmin.aws.clients import DescribeStackEventsAPI
from mintadmin.models.stack import EventSink, StackEvent


class EventStreamer:
    """
    Streams stack events for one polling loop.

    DescribeStackEvents has no resume cursor and returns the full history
    newest first, so every call re-reads the whole list and filters it
    against the ids already emitted and the deployment start time.
    """

    def __init__(self, cfn_events: DescribeStackEventsAPI):
        self.cfn_events = cfn_events
        self.seen: Set[str] = set()

    def fetch_events(self, stack_name: str) -> List[StackEvent]:
        """Fetch the stack's event history, newest first."""
        response = self.cfn_events.describe_stack_events(StackName=stack_name)
        return [StackEvent.from_dict(e) for e in response.get("StackEvents") or []]

    def stream_new(
        self,
        stack_name: str,
        started_at: datetime,
        sink: Optional[EventSink] = None,
    ) -> List[StackEvent]:
        """
        Write events not yet seen that happened at or after started_at.

        Args:
            stack_name: Stack to read events for
            started_at: Deployment start; older events belong to earlier
                operations and are never emitted
            sink: Destination for event lines (None discards them)

        Returns:
            Newly emitted events, oldest first

        Raises:
            Exception: Whatever the events call raises; the caller decides
                whether it is fatal
        """
        fresh = []
        for event in self.fetch_events(stack_name):
            if event.event_id in self.seen:
                continue
            if event.occurred_before(started_at):
                continue
            self.seen.add(event.event_id)
            fresh.append(event)

        fresh.reverse()

        if sink is not None:
            for event in fresh:
                sink.write(event.format_line() + "\n")

        return fresh

# src/guiderep/events/journal.py

import json
import logging
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple, Union

from guiderep.events.schema import Event, EventKind

logger = logging.getLogger(__name__)

Subscriber = Callable[[Event], None]


class EventJournal:
    """
    Ordered record of every notification the ledger has published.

    Events are handed over per operation, after all of that operation's
    mutations are applied, then numbered and passed to each subscriber.
    Delivery beyond the subscribers is up to the host.
    """

    def __init__(self, ledger_name: Optional[str] = None):
        """
        Args:
            ledger_name: Label written into generated event logs
        """
        self.ledger_name = ledger_name or "guiderep"
        self._events: List[Event] = []
        self._subscribers: List[Subscriber] = []
        self.tool_version = self._get_tool_version()

    def _get_tool_version(self) -> str:
        """Get GuideRep version from package metadata."""
        try:
            from guiderep import __version__

            return __version__
        except ImportError:
            return "unknown"

    def subscribe(self, callback: Subscriber) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def publish(self, events: Iterable[Event]) -> List[Event]:
        """
        Number and record a batch of events, then notify subscribers.

        A failing subscriber is logged and skipped; the events stay recorded.

        Returns:
            The recorded events with their sequence numbers.
        """
        published = []
        for event in events:
            numbered = event.model_copy(update={"sequence": len(self._events)})
            self._events.append(numbered)
            published.append(numbered)

        for event in published:
            logger.debug(f"Event #{event.sequence}: {event.kind.value}")
            for callback in list(self._subscribers):
                try:
                    callback(event)
                except Exception as e:
                    logger.error(f"Subscriber failed on event #{event.sequence}: {e}")

        return published

    @property
    def events(self) -> Tuple[Event, ...]:
        return tuple(self._events)

    def by_kind(self, kind: Union[EventKind, str]) -> List[Event]:
        kind = EventKind(kind)
        return [ev for ev in self._events if ev.kind == kind]

    def __len__(self) -> int:
        return len(self._events)

    def generate_event_log(self, output_path: Union[str, Path]) -> str:
        """
        Write the journal as a standalone JSON event log.

        Args:
            output_path: Path to save the event log

        Returns:
            Absolute path to the event log file.
        """
        output_path = Path(output_path).resolve()
        output_path.parent.mkdir(parents=True, exist_ok=True)

        kinds = Counter(ev.kind.value for ev in self._events)
        manifest = {
            "journal_header": {
                "ledger": self.ledger_name,
                "generated_at": self._get_timestamp(),
                "tool": f"GuideRep v{self.tool_version}",
            },
            "event_summary": {
                "total_events": len(self._events),
                "by_kind": dict(sorted(kinds.items())),
            },
            "events": [ev.model_dump(mode="json") for ev in self._events],
        }

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(manifest, f, indent=2)

        logger.info(f"Event log saved to: {output_path}")
        return str(output_path)

    def _get_timestamp(self) -> str:
        """Get ISO 8601 UTC timestamp with timezone."""
        return datetime.now(timezone.utc).isoformat()

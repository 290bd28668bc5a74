"""Per-test outcome notifications for host test frameworks."""

import logging

logger = logging.getLogger(__name__)


class Notifier:
    """Receives test start/finish/failure events. Does nothing by default."""

    def start(self, name: str) -> None:
        pass

    def finish(self, name: str) -> None:
        pass

    def fail(self, name: str, detail: str) -> None:
        pass


class LoggingNotifier(Notifier):
    """Logs each outcome."""

    def start(self, name: str) -> None:
        logger.info("Running %s", name)

    def finish(self, name: str) -> None:
        logger.info("  [PASS] %s", name)

    def fail(self, name: str, detail: str) -> None:
        logger.warning("  [FAIL] %s: %s", name, detail.splitlines()[0] if detail else "")


class RecordingNotifier(Notifier):
    """Keeps every event as a tuple, in order."""

    def __init__(self):
        self.events: list[tuple] = []

    def start(self, name: str) -> None:
        self.events.append(("start", name))

    def finish(self, name: str) -> None:
        self.events.append(("finish", name))

    def fail(self, name: str, detail: str) -> None:
        self.events.append(("fail", name, detail))

    def failures(self) -> list[str]:
        return [e[1] for e in self.events if e[0] == "fail"]

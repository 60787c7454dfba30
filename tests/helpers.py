"""Shared test helpers for TomatoTimer."""


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


# ── recording collaborators ───────────────────────────────────────────────


class FakeSound:
    def __init__(self, fail=False):
        self.plays = 0
        self.fail = fail

    def play(self):
        self.plays += 1
        if self.fail:
            raise OSError("audio device unavailable")


class FakeScheduler:
    def __init__(self, fail=False):
        self.scheduled: list[tuple[int, str, str]] = []
        self.cancels = 0
        self.delivered = False
        self.fail = fail

    def schedule(self, delay_seconds, title, body):
        if self.fail:
            raise RuntimeError("notifications not permitted")
        self.scheduled.append((delay_seconds, title, body))

    def cancel_all(self):
        self.cancels += 1
        self.delivered = False

    def consume_delivered(self):
        delivered, self.delivered = self.delivered, False
        return delivered


class FakeNotifier:
    def __init__(self):
        self.messages: list[str] = []

    def notify(self, message):
        self.messages.append(message)


class MemoryStore:
    def __init__(self, snapshot=None, fail=False):
        self.snapshot = snapshot
        self.saves: list = []
        self.fail = fail

    def load(self):
        return self.snapshot

    def save(self, snapshot):
        if self.fail:
            raise OSError("disk full")
        self.saves.append(snapshot)
        self.snapshot = snapshot

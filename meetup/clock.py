from datetime import datetime, timezone


def utc_now():
    """Naive UTC timestamp, the form stored in DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class FrozenClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

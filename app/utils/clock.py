from datetime import datetime


class SystemClock:
    """Wall-clock time source, local time as naive datetimes."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock:
    """Clock frozen at a given moment; `set` moves it."""

    def __init__(self, moment: datetime):
        self.moment = moment

    def set(self, moment: datetime):
        self.moment = moment

    def now(self) -> datetime:
        return self.moment


system_clock = SystemClock()


def get_clock():
    """Provide the time source used by request handlers."""
    return system_clock

from datetime import UTC, datetime


class SystemClock:
    def now_utc(self) -> datetime:
        return datetime.now(UTC)

    def timestamp(self) -> int:
        """Whole seconds since the epoch."""
        return int(self.now_utc().timestamp())

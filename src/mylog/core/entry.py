"""Journal entry domain model - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class Entry:
    """A single timestamped journal record."""

    timestamp: datetime
    body: str

    def __post_init__(self):
        if not isinstance(self.body, str) or not self.body.strip():
            raise ValueError("Entry body must be a non-empty string")
        try:
            self.body.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError("Entry body is not valid UTF-8 text")

    @property
    def day(self) -> date:
        """Calendar date of the entry, as recorded."""
        return self.timestamp.date()

    @classmethod
    def now(cls, body: str, as_of: datetime | None = None) -> "Entry":
        """Create an entry stamped with the current local time."""
        as_of = as_of or datetime.now()
        return cls(timestamp=as_of.astimezone().replace(microsecond=0), body=body.strip())

    def format_time(self) -> str:
        return self.timestamp.strftime("%Y-%m-%d %H:%M")


def parse_date(value: str, today: date | None = None) -> date:
    """
    Parse a date given on the command line.

    Accepts YYYY-MM-DD, or MM-DD for a day in the current year.
    """
    today = today or date.today()
    parts = value.strip().split("-")
    try:
        match len(parts):
            case 2:
                return today.replace(month=int(parts[0]), day=int(parts[1]))
            case 3:
                return date.fromisoformat(value.strip())
    except ValueError:
        pass
    raise ValueError(f"Invalid date '{value}'.")

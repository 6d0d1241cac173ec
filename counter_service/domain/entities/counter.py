"""Counter entity — the single versioned record shared by all callers."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Counter:
    id: str
    value: int
    version: int

    def with_value(self, new_value: int) -> "Counter":
        """Return the record a successful write of *new_value* would produce."""
        return Counter(id=self.id, value=new_value, version=self.version + 1)

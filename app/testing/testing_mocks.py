from typing import Iterable, Optional, Any
from app.core.exceptions import StorageUnavailable
from app.services.sequence_service import SequenceGenerator


class FailingSequenceGenerator(SequenceGenerator):
    """
    Real generator that raises StorageUnavailable on chosen calls (1-based),
    e.g. FailingSequenceGenerator(fail_on={2}) fails the second issuance.
    """
    def __init__(self, fail_on: Iterable[int]):
        self.fail_on = set(fail_on)
        self.calls = 0

    async def next_value(self, name: str, conn: Optional[Any] = None) -> int:
        self.calls += 1
        if self.calls in self.fail_on:
            raise StorageUnavailable(f"Simulated outage issuing '{name}'.")
        return await super().next_value(name, conn=conn)


class CountingSequenceGenerator(SequenceGenerator):
    """Real generator that records every name it issued a value for."""
    def __init__(self):
        self.issued = []

    async def next_value(self, name: str, conn: Optional[Any] = None) -> int:
        value = await super().next_value(name, conn=conn)
        self.issued.append((name, value))
        return value

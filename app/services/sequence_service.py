import logging
from typing import Any, Iterable, Optional

from tortoise.exceptions import BaseORMException
from tortoise.transactions import in_transaction

from app.core.exceptions import InvalidName, StorageUnavailable
from app.models.counter import Counter

log = logging.getLogger(__name__)


def _validate_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidName(f"Sequence name must be a non-empty string, got {name!r}.")
    return name


class SequenceGenerator:
    """
    Issues unique, strictly increasing integers per named counter.

    The counter row is locked (SELECT ... FOR UPDATE) for the lifetime of the
    transaction that increments it, so concurrent callers on the same name are
    serialized and every integer is handed to exactly one caller.
    """

    async def next_value(self, name: str, conn: Optional[Any] = None) -> int:
        """
        Returns the next value for `name`, creating the counter on first use.

        When `conn` is an open transaction the increment joins it and is rolled
        back together with the caller's writes. Otherwise the increment runs
        and commits in its own transaction.
        """
        name = _validate_name(name)
        try:
            if conn is not None:
                return await self._increment(name, conn)
            async with in_transaction() as own_conn:
                return await self._increment(name, own_conn)
        except (BaseORMException, ConnectionError, OSError) as e:
            log.error(f"Counter store unavailable while issuing '{name}': {e}")
            raise StorageUnavailable(f"Could not issue next value for '{name}'.") from e

    async def _increment(self, name: str, conn: Any) -> int:
        counter = await Counter.filter(name=name).using_db(conn).select_for_update().first()
        if counter is None:
            counter = await Counter.create(name=name, value=0, using_db=conn)
        counter.value += 1
        await counter.save(update_fields=['value'], using_db=conn)
        return counter.value

    async def current_value(self, name: str) -> int:
        """Last value issued for `name`, or 0 if the counter was never used."""
        name = _validate_name(name)
        try:
            counter = await Counter.get_or_none(name=name)
        except (BaseORMException, ConnectionError, OSError) as e:
            raise StorageUnavailable(f"Could not read counter '{name}'.") from e
        return counter.value if counter else 0

    async def ensure(self, names: Iterable[str]) -> None:
        """Creates missing counter rows so that first use never races on the insert."""
        for name in names:
            name = _validate_name(name)
            try:
                _, created = await Counter.get_or_create(name=name, defaults={"value": 0})
            except (BaseORMException, ConnectionError, OSError) as e:
                raise StorageUnavailable(f"Could not create counter '{name}'.") from e
            if created:
                log.info(f"Counter '{name}' created.")


_generator = SequenceGenerator()


def get_sequence_generator() -> SequenceGenerator:
    """FastAPI dependency returning the process-wide generator. Override it in tests."""
    return _generator

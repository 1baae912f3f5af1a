from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

Row = Dict[str, Any]


@dataclass(frozen=True)
class CommandResult:
    rowcount: int
    inserted_primary_key: Optional[Tuple[Any, ...]] = None
    rows: List[Row] = field(default_factory=list)


class StoreTransaction(ABC):
    """A single store session; statements share one connection and one transaction."""

    @abstractmethod
    async def fetch_all(self, statement: Any) -> List[Row]:
        pass

    @abstractmethod
    async def execute(self, statement: Any) -> CommandResult:
        pass

    @abstractmethod
    async def commit(self) -> None:
        pass

    @abstractmethod
    async def rollback(self) -> None:
        pass


class RecordStore(ABC):
    """Capability to run bound statements against a tabular store.

    Every call acquires and releases its own connection. ``timeout`` is in
    seconds; ``None`` means the store's default.
    """

    supports_returning: bool = True

    @abstractmethod
    async def fetch_all(self, statement: Any, timeout: Optional[float] = None) -> List[Row]:
        pass

    @abstractmethod
    async def fetch_scalar(self, statement: Any, timeout: Optional[float] = None) -> Any:
        pass

    @abstractmethod
    def begin(self, timeout: Optional[float] = None) -> AbstractAsyncContextManager[StoreTransaction]:
        """Open a transaction that commits on clean exit and rolls back on error."""

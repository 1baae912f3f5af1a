from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

from sqlalchemy import Column, Table

from record_access.domain.exceptions import InvalidParameterError
from record_access.domain.models.parameter import ParameterSpec


@dataclass(frozen=True)
class EntitySchema:
    """Describes one record collection: what may be read, filtered and written.

    ``readable`` is the projection allowlist. Columns listed in ``secret`` can be
    bound on write or compared in a predicate but are never part of any
    projection, and ``readable`` may not name them.
    """

    name: str
    table: Table
    key: str
    readable: Tuple[str, ...]
    parameters: Mapping[str, ParameterSpec]
    insertable: Tuple[str, ...]
    required: Tuple[str, ...] = ()
    secret: Tuple[str, ...] = ()
    unique: Tuple[str, ...] = ()
    ordering_key: Optional[str] = None

    def __post_init__(self):
        leaked = set(self.readable) & set(self.secret)
        if leaked:
            raise ValueError(f"Secret columns cannot be readable: {sorted(leaked)}")
        if self.key in self.insertable:
            raise ValueError(f"Key column '{self.key}' is assigned by the store")
        missing = (set(self.readable) | set(self.insertable) | set(self.secret)) - set(self.table.c.keys())
        if missing:
            raise ValueError(f"Unknown columns for table '{self.table.name}': {sorted(missing)}")

    def projection(self) -> List[Column]:
        return [self.table.c[name] for name in self.readable]

    def readable_column(self, name: str) -> Column:
        if name not in self.readable:
            raise InvalidParameterError(name, f"not a readable field of {self.name}")
        return self.table.c[name]

    def secret_column(self, name: str) -> Column:
        if name not in self.secret:
            raise InvalidParameterError(name, f"not a secret field of {self.name}")
        return self.table.c[name]

    def parameter(self, name: str) -> Optional[ParameterSpec]:
        return self.parameters.get(name)

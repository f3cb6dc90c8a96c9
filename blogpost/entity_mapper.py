from collections.abc import Iterable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel


T = TypeVar("T", bound=BaseModel)


class EntityMapper(Generic[T]):
    """Maps store rows to entities.

    Rows holding only some of the columns populate only those fields; the
    rest keep the entity defaults.
    """

    def __init__(self, entity_class: type[T]):
        self.entity_class = entity_class

    def map_row_to_entity(self, row: Any) -> T:
        fields = self.entity_class.model_fields
        return self.entity_class(**{k: v for k, v in dict(row).items() if k in fields})

    def map_rows_to_entities(self, rows: Iterable[Any]) -> list[T]:
        return [self.map_row_to_entity(row) for row in rows]

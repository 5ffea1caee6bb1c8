from __future__ import annotations

from rdflib import Graph
from typing_extensions import TYPE_CHECKING, Iterable, Optional, Set

if TYPE_CHECKING:
    from .entity import RDFEntity


class TargetModel:
    """
    A graph entities are written to. Every entity is written once, so writing an entity graph
    with cycles terminates and referenced entities are written along with the ones referring to them.
    """

    def __init__(self, graph: Optional[Graph] = None):
        self.graph = graph if graph is not None else Graph()
        self._entities: Set[RDFEntity] = set()

    @property
    def entities(self) -> Set[RDFEntity]:
        return set(self._entities)

    def __contains__(self, entity: RDFEntity) -> bool:
        return entity in self._entities

    def add(self, entity: RDFEntity) -> TargetModel:
        if entity not in self._entities:
            self._entities.add(entity)
            entity.add_to_model(self)
        return self

    def add_all(self, entities: Iterable[RDFEntity]) -> TargetModel:
        for entity in entities:
            self.add(entity)
        return self

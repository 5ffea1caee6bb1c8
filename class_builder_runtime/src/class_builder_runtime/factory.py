from __future__ import annotations

from rdflib import Graph, URIRef
from rdflib.namespace import RDF
from typing_extensions import Any, Callable, Dict, Mapping, Optional

from .entity import RDFEntity
from .exceptions import UnknownEntityTypeError

EntityConstructor = Callable[[URIRef], RDFEntity]


class EntityFactory:
    """
    Creates entities of the generated classes while loading them from a graph.

    The factory is a map from class IRIs to constructors. The host application provides it, so it
    decides which concrete class is instantiated for a class IRI.
    """

    def __init__(self, creators: Optional[Mapping[Any, EntityConstructor]] = None):
        """
        :param creators: Constructor per class IRI. A constructor takes the IRI of the new entity.
        """
        self.creators: Dict[URIRef, EntityConstructor] = {
            URIRef(class_iri): creator for class_iri, creator in (creators or {}).items()
        }
        self._resolved: Dict[URIRef, RDFEntity] = {}

    def register(self, class_iri: Any, creator: EntityConstructor):
        self.creators[URIRef(class_iri)] = creator

    def create(self, class_iri: Any, iri: Any) -> RDFEntity:
        """
        Create a new, empty entity.

        :raises UnknownEntityTypeError: If there is no constructor for the class.
        """
        creator = self.creators.get(URIRef(class_iri))
        if creator is None:
            raise UnknownEntityTypeError(class_iri)
        return creator(URIRef(iri))

    def resolve(self, graph: Graph, class_iri: Any, iri: Any) -> RDFEntity:
        """
        Get the entity of an IRI, creating and loading it from the graph the first time it is asked for.
        The most specific registered class among the rdf:type statements of the entity is used if it
        is a subclass of the requested one.

        :param graph: The graph the entity is loaded from.
        :param class_iri: The class the entity is expected to have, e.g. the range of a property.
        :param iri: The IRI of the entity.
        """
        iri = URIRef(iri)
        if iri in self._resolved:
            return self._resolved[iri]
        entity = self._most_specific(graph, class_iri, iri)
        self._resolved[iri] = entity
        entity.load_from_model(graph, self)
        return entity

    def load(self, graph: Graph, class_iri: Any, iri: Any) -> RDFEntity:
        """
        Load an entity and everything it references from a graph. Entities resolved by earlier
        loads are forgotten, so every load reads fresh entities from its graph.
        """
        self.clear()
        return self.resolve(graph, class_iri, iri)

    def clear(self):
        """Forget the entities resolved so far."""
        self._resolved.clear()

    def _most_specific(self, graph: Graph, class_iri: Any, iri: URIRef) -> RDFEntity:
        expected = self.create(class_iri, iri)
        candidates = [
            self.create(type_iri, iri)
            for type_iri in sorted(set(graph.objects(iri, RDF.type)), key=str)
            if type_iri in self.creators
        ]
        candidates = [c for c in candidates if isinstance(c, type(expected))]
        for candidate in candidates:
            if all(isinstance(candidate, type(other)) for other in candidates):
                return candidate
        return expected

from __future__ import annotations

from rdflib import Graph, Literal, URIRef
from rdflib.namespace import RDF, RDFS
from typing_extensions import (
    TYPE_CHECKING,
    Any,
    ClassVar,
    Iterable,
    List,
    Optional,
    Type,
)

from .exceptions import IncompatibleFactoryError

if TYPE_CHECKING:
    from .factory import EntityFactory
    from .target_model import TargetModel


def coerce_literal(value: Literal, python_type: Optional[Type] = None) -> Any:
    """
    Convert an RDF literal to a Python value.

    :param value: The literal.
    :param python_type: The type the value should have, the natural Python type of the literal
     if not given.
    :return: The converted value, or the natural Python value if it cannot be converted.
    """
    python_value = value.toPython()
    if python_type is None:
        return python_value
    if isinstance(python_value, python_type) and not isinstance(python_value, Literal):
        return python_value
    if python_type is bool:
        return str(python_value).strip().lower() in ("true", "1")
    try:
        return python_type(str(python_value) if python_type is str else python_value)
    except (TypeError, ValueError):
        return python_value


class RDFEntity:
    """
    Base of the generated entity classes. An entity is identified by its IRI and knows how to
    write itself to and read itself from an RDF graph.
    """

    CLASS_IRI: ClassVar[Optional[URIRef]] = None
    """
    The ontology class the entity class was generated from.
    """

    def __init__(self, iri: Any):
        self.iri = URIRef(iri)

    @property
    def class_iri(self) -> Optional[URIRef]:
        return type(self).CLASS_IRI

    @property
    def label(self) -> Optional[str]:
        """
        The rdfs:label written for the entity. Subclasses override it to provide one.
        """
        return None

    def __eq__(self, other):
        return type(self) is type(other) and self.iri == other.iri

    def __hash__(self):
        return hash((type(self), self.iri))

    def __repr__(self):
        return f"{type(self).__name__}({str(self.iri)!r})"

    def add_to_model(self, target: TargetModel):
        """
        Write the type and label statements of the entity. Generated subclasses add their properties.
        """
        if self.class_iri is not None:
            target.graph.add((self.iri, RDF.type, self.class_iri))
        if self.label is not None:
            target.graph.add((self.iri, RDFS.label, Literal(self.label)))

    def load_from_model(self, graph: Graph, factory: EntityFactory):
        """
        Read the property values of the entity from a graph. Generated subclasses implement it.
        """

    @staticmethod
    def check_factory(factory: Any):
        from .factory import EntityFactory

        if not isinstance(factory, EntityFactory):
            raise IncompatibleFactoryError(factory)

    def add_value(
        self,
        target: TargetModel,
        predicate: URIRef,
        value: Any,
        datatype: Optional[URIRef] = None,
    ):
        if value is None:
            return
        target.graph.add((self.iri, predicate, Literal(value, datatype=datatype)))

    def add_array(
        self,
        target: TargetModel,
        predicate: URIRef,
        values: Optional[Iterable[Any]],
        datatype: Optional[URIRef] = None,
    ):
        for value in values or ():
            self.add_value(target, predicate, value, datatype)

    def add_object(self, target: TargetModel, predicate: URIRef, entity: Optional[RDFEntity]):
        """
        Link an entity and write it to the target as well.
        """
        if entity is None:
            return
        target.graph.add((self.iri, predicate, entity.iri))
        target.add(entity)

    def add_collection(
        self,
        target: TargetModel,
        predicate: URIRef,
        entities: Optional[Iterable[RDFEntity]],
    ):
        for entity in entities or ():
            self.add_object(target, predicate, entity)

    def own_statements(self, graph: Graph) -> Graph:
        """
        The statements of a graph whose subject is this entity.
        """
        statements = Graph()
        for triple in graph.triples((self.iri, None, None)):
            statements.add(triple)
        return statements

    def load_value(
        self, graph: Graph, predicate: URIRef, python_type: Optional[Type] = None
    ) -> Any:
        values = self.load_array(graph, predicate, python_type)
        return values[0] if values else None

    def load_array(
        self, graph: Graph, predicate: URIRef, python_type: Optional[Type] = None
    ) -> List[Any]:
        literals = sorted(
            (o for o in graph.objects(self.iri, predicate) if isinstance(o, Literal)),
            key=lambda literal: (str(literal), str(literal.datatype or ""), literal.language or ""),
        )
        return [coerce_literal(literal, python_type) for literal in literals]

    def object_iris(self, graph: Graph, predicate: URIRef) -> List[URIRef]:
        return sorted(o for o in graph.objects(self.iri, predicate) if isinstance(o, URIRef))

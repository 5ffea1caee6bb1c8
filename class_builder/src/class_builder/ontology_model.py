"""
Read access to the ontology graph the generators work on. All queries are pure, the graph
is only changed by :meth:`OntologyModel.load`.
"""

from __future__ import annotations

import os
from collections import Counter

import rdflib
from ordered_set import OrderedSet
from rdflib import BNode, Literal, URIRef
from rdflib.namespace import DC, DCTERMS, OWL, RDF, RDFS, SKOS
from rdflib.parser import Parser
from rdflib.plugin import PluginException
from rdflib.util import guess_format
from typing_extensions import Any, Iterable, List, Optional, Set, Tuple

from . import logger
from .exceptions import (
    ConfigurationError,
    OntologyFileNotFoundError,
    OntologyParseError,
)
from .utils import NamingRegistry, PropertyDirection

CLASS_MARKERS = (RDFS.Class, OWL.Class)
PROPERTY_MARKERS = (RDF.Property, OWL.DatatypeProperty, OWL.ObjectProperty)

LABEL_PREDICATES = (RDFS.label, DCTERMS.title, DC.title, SKOS.prefLabel, SKOS.altLabel)
"""
Predicates a title is taken from, in order of preference.
"""

COMMENT_PREDICATES = (
    RDFS.comment,
    DCTERMS.description,
    SKOS.definition,
    DC.description,
)
"""
Predicates a description is taken from, in order of preference.
"""


class OntologyModel:
    """
    An rdflib graph holding one or more merged ontology files, with the queries the
    classifier and the code emitters need.
    """

    def __init__(
        self,
        graph: Optional[rdflib.Graph] = None,
        preferred_language: Optional[str] = None,
    ):
        """
        :param graph: An already populated graph, a new empty one is created if not given.
        :param preferred_language: Language tag preferred when picking titles and descriptions.
        """
        self.graph = graph if graph is not None else rdflib.Graph()
        self.preferred_language = preferred_language
        self._reported_ambiguities: Set[Tuple[Any, Any]] = set()

    @classmethod
    def from_files(
        cls,
        paths: Iterable[str],
        input_format: Optional[str] = None,
        preferred_language: Optional[str] = None,
    ) -> OntologyModel:
        model = cls(preferred_language=preferred_language)
        for path in paths:
            model.load(path, input_format)
        return model

    def load(self, path: str, input_format: Optional[str] = None) -> OntologyModel:
        """
        Parse an ontology file and merge its statements into the graph.

        :param path: Path of the file.
        :param input_format: A MIME type like 'text/turtle' or an rdflib format name. Guessed from the
         file extension if not given.
        :return: This model.
        :raises OntologyFileNotFoundError: If the file does not exist.
        :raises ConfigurationError: If the format is not known to rdflib.
        :raises OntologyParseError: If the content cannot be parsed.
        """
        if not os.path.isfile(path):
            raise OntologyFileNotFoundError(path)
        if input_format:
            self._check_format(input_format)
        rdf_format = input_format or guess_format(path)
        parsed = rdflib.Graph()
        try:
            parsed.parse(path, format=rdf_format)
        except OSError:
            raise
        except Exception as exc:
            raise OntologyParseError(path, rdf_format, str(exc)) from exc
        logger.debug(f"Loaded {len(parsed)} statements from {path}")
        self.graph += parsed
        for prefix, namespace in parsed.namespaces():
            self.graph.bind(prefix, namespace, override=False)
        return self

    @staticmethod
    def _check_format(input_format: str):
        try:
            rdflib.plugin.get(input_format, Parser)
        except PluginException as exc:
            raise ConfigurationError(f"Unknown input format: {input_format}") from exc

    def find_classes(self) -> OrderedSet:
        """
        :return: All subjects typed with one of the class markers, sorted by IRI.
        """
        classes = set()
        for marker in CLASS_MARKERS:
            classes.update(self.graph.subjects(RDF.type, marker))
        return OrderedSet(sorted(classes, key=str))

    def find_properties(
        self, class_iri: Any, direction: PropertyDirection = PropertyDirection.DOMAIN
    ) -> OrderedSet:
        """
        Find the properties attached to a class.

        :param class_iri: The class.
        :param direction: DOMAIN for the properties the class declares, RANGE for the properties
         pointing at the class.
        :return: The properties sorted by IRI.
        """
        predicate = RDFS.domain if direction == PropertyDirection.DOMAIN else RDFS.range
        return OrderedSet(
            p
            for p in self.find_all_properties()
            if class_iri in self.get_referenced_types(p, predicate)
        )

    def find_all_properties(self) -> OrderedSet:
        properties = set()
        for marker in PROPERTY_MARKERS:
            properties.update(
                p for p in self.graph.subjects(RDF.type, marker) if isinstance(p, URIRef)
            )
        return OrderedSet(sorted(properties, key=str))

    def find_terms(self) -> List[URIRef]:
        """
        :return: Every class and property with an IRI, sorted by IRI.
        """
        classes = [c for c in self.find_classes() if isinstance(c, URIRef)]
        return sorted(set(classes) | set(self.find_all_properties()), key=str)

    def get_referenced_types(self, subject: Any, predicate: Any) -> OrderedSet:
        """
        The classes a property refers to through `predicate` (rdfs:domain or rdfs:range). Members
        of owl:unionOf descriptions are included. Several statements are combined into their
        union, which is reported once since the generated code cannot express an intersection.
        """
        objects = list(self.graph.objects(subject, predicate))
        if len(objects) > 1 and (subject, predicate) not in self._reported_ambiguities:
            self._reported_ambiguities.add((subject, predicate))
            logger.warning(
                f"{NamingRegistry.local_name(subject)} has {len(objects)} "
                f"{NamingRegistry.local_name(predicate)} statements, using their union"
            )
        types = OrderedSet()
        for obj in objects:
            if isinstance(obj, URIRef):
                types.add(obj)
            elif isinstance(obj, BNode):
                types.update(self.get_union_types(obj))
        return types

    def get_union_types(self, node: Any) -> List[URIRef]:
        """The IRI members of the owl:unionOf lists of a blank node."""
        members = []
        for head in self.graph.objects(node, OWL.unionOf):
            members.extend(
                m
                for m in NamingRegistry.get_rdf_list(self.graph, head)
                if isinstance(m, URIRef)
            )
        return members

    def first_object_iri(self, subject: Any, predicate: Any) -> Optional[URIRef]:
        for obj in self.graph.objects(subject, predicate):
            if isinstance(obj, URIRef):
                return obj
        return None

    def first_literal(
        self,
        subject: Any,
        language: Optional[str],
        predicates: Iterable[Any],
    ) -> Optional[Literal]:
        """
        Find the first literal among the given predicates, tried in order. For each predicate
        a literal tagged with `language` wins over the other ones.

        :param subject: The resource described by the literal.
        :param language: The preferred language tag, or None to accept the first literal found.
        :param predicates: The predicates to look at.
        :return: The literal, or None.
        """
        for predicate in predicates:
            result = None
            for obj in self.graph.objects(subject, predicate):
                if not isinstance(obj, Literal):
                    continue
                if result is None:
                    result = obj
                if language is not None and obj.language == language:
                    result = obj
                    break
            if result is not None:
                return result
        return None

    def title(self, iri: Any) -> Optional[str]:
        literal = self.first_literal(iri, self.preferred_language, LABEL_PREDICATES)
        return None if literal is None else str(literal)

    def description(self, iri: Any) -> Optional[str]:
        literal = self.first_literal(iri, self.preferred_language, COMMENT_PREDICATES)
        return None if literal is None else str(literal)

    def see_also(self, iri: Any) -> List[str]:
        return sorted(
            str(o) for o in self.graph.objects(iri, RDFS.seeAlso) if isinstance(o, URIRef)
        )

    def superclass(self, class_iri: Any) -> Optional[URIRef]:
        """
        The superclass of a class. Only one superclass is supported, the first one found is used.
        """
        superclasses = [
            s for s in self.graph.objects(class_iri, RDFS.subClassOf) if isinstance(s, URIRef)
        ]
        if not superclasses:
            return None
        if len(superclasses) > 1:
            logger.warning(
                f"{NamingRegistry.local_name(class_iri)} has {len(superclasses)} superclasses, "
                f"only {NamingRegistry.local_name(superclasses[0])} is used"
            )
        return superclasses[0]

    def property_range(self, property_iri: Any) -> Optional[URIRef]:
        return self.first_object_iri(property_iri, RDFS.range)

    def is_functional(self, property_iri: Any) -> bool:
        return (property_iri, RDF.type, OWL.FunctionalProperty) in self.graph

    def is_inverse_functional(self, property_iri: Any) -> bool:
        return (property_iri, RDF.type, OWL.InverseFunctionalProperty) in self.graph

    def namespace(self) -> str:
        """
        The namespace of the ontology: the one most of the terms share, or the owl:Ontology
        IRI for an ontology without terms.
        """
        counts = Counter(NamingRegistry.namespace(t) for t in self.find_terms())
        if counts:
            return sorted(counts.items(), key=lambda item: (-item[1], item[0]))[0][0]
        for ontology in self.graph.subjects(RDF.type, OWL.Ontology):
            if isinstance(ontology, URIRef):
                iri = str(ontology)
                return iri if iri.endswith(("#", "/")) else iri + "#"
        return ""

    def prefix(self, namespace: str) -> Optional[str]:
        for prefix, bound in self.graph.namespaces():
            if str(bound) == namespace and prefix:
                return prefix
        return None

from __future__ import annotations

import keyword
import re
from enum import Enum

import rdflib
from typing_extensions import Any, List, Tuple


class PropertyClassification(str, Enum):
    """How a property is represented in generated code."""

    VALUE = "Value"
    """
    A single literal value.
    """
    ARRAY = "Array"
    """
    Several literal values.
    """
    OBJECT = "Object"
    """
    A single reference to another generated entity.
    """
    COLLECTION = "Collection"
    """
    A set of references to other generated entities.
    """

    @property
    def is_reference(self) -> bool:
        return self in (PropertyClassification.OBJECT, PropertyClassification.COLLECTION)

    @property
    def is_multi_valued(self) -> bool:
        return self in (PropertyClassification.ARRAY, PropertyClassification.COLLECTION)


class PropertyDirection(str, Enum):
    """Which end of a property a class is looked up at."""

    DOMAIN = "domain"
    RANGE = "range"


class NamingRegistry:
    """Helpers that turn IRIs into identifiers of the generated code."""

    _IRREGULAR_PLURALS = {
        "child": "children",
        "man": "men",
        "woman": "women",
        "foot": "feet",
        "tooth": "teeth",
        "mouse": "mice",
        "datum": "data",
        "criterion": "criteria",
        "index": "indices",
    }

    @staticmethod
    def split_iri(iri: Any) -> Tuple[str, str]:
        """
        Split an IRI into its namespace and local name. The namespace ends with the last
        '#', or the last '/' if there is no '#', or the last ':' if there is neither.

        :param iri: The IRI to split.
        :return: The namespace and the local name.
        """
        iri = str(iri)
        for separator in ("#", "/", ":"):
            index = iri.rfind(separator)
            if index >= 0:
                return iri[: index + 1], iri[index + 1 :]
        return "", iri

    @classmethod
    def namespace(cls, iri: Any) -> str:
        return cls.split_iri(iri)[0]

    @classmethod
    def local_name(cls, iri: Any) -> str:
        return cls.split_iri(iri)[1]

    @staticmethod
    def sanitize(name: str) -> str:
        """Replace everything that cannot appear in an identifier by underscores."""
        name = re.sub(r"[^a-zA-Z0-9_]", "_", name)
        if not name or name[0].isdigit():
            name = "_" + name
        return name

    @classmethod
    def class_name(cls, iri: Any) -> str:
        """The generated class name of an ontology class, e.g. 'Person' for ex:Person."""
        return cls.to_pascal_case(cls.sanitize(cls.local_name(iri)))

    @classmethod
    def property_name(cls, iri: Any) -> str:
        """The generated field name of an ontology property, e.g. 'worksFor'."""
        return cls.lower_first(cls.sanitize(cls.local_name(iri)))

    @staticmethod
    def python_identifier(name: str) -> str:
        if keyword.iskeyword(name) or keyword.issoftkeyword(name):
            return name + "_"
        return name

    @staticmethod
    def lower_first(name: str) -> str:
        return name[:1].lower() + name[1:]

    @staticmethod
    def upper_first(name: str) -> str:
        return name[:1].upper() + name[1:]

    @classmethod
    def plural(cls, word: str) -> str:
        """
        English plural of a (possibly camel-cased) word. Only the last word part changes,
        so 'researchGroup' becomes 'researchGroups'.
        """
        if not word:
            return word
        head, tail = re.match(r"(.*?)([A-Z]?[a-z0-9]*)$", word).groups()
        if not tail:
            return word + "s"
        irregular = cls._IRREGULAR_PLURALS.get(tail.lower())
        if irregular:
            return head + tail[:1] + irregular[1:]
        if re.search(r"(s|x|z|ch|sh)$", tail):
            return head + tail + "es"
        if re.search(r"[^aeiou]y$", tail):
            return head + tail[:-1] + "ies"
        return head + tail + "s"

    @staticmethod
    def to_snake_case(name: str) -> str:
        """Convert a name like 'worksFor' or 'WorksFor' to 'works_for'"""
        s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", name)
        s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
        return s2.lower()

    @staticmethod
    def to_pascal_case(name: str) -> str:
        """Convert a name like 'worksFor' or 'works_for' to 'WorksFor'"""
        parts = [p for p in re.split(r"[_\-\s]+", name) if p]
        if len(parts) > 1:
            return "".join(p[:1].upper() + p[1:] for p in parts)
        return name[:1].upper() + name[1:]

    @staticmethod
    def get_rdf_list(graph: rdflib.Graph, head: Any) -> List[Any]:
        """Members of the RDF collection starting at `head`."""
        items = []
        while head is not None and head != rdflib.RDF.nil:
            items.append(graph.value(head, rdflib.RDF.first))
            head = graph.value(head, rdflib.RDF.rest)
        return [i for i in items if i is not None]

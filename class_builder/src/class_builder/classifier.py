from __future__ import annotations

from dataclasses import dataclass

from rdflib.namespace import XSD
from typing_extensions import Any, Dict, Optional

from .ontology_model import OntologyModel
from .utils import NamingRegistry, PropertyClassification


@dataclass(frozen=True)
class TypeMapping:
    """
    How a target language spells the types of generated fields.
    The format strings receive `name` (the class name), `iri` (the range IRI) and `type`
    (the element type).
    """

    data_types: Dict[Any, str]
    """
    Scalar type per XSD datatype.
    """
    default_type: str
    """
    Scalar type used when a range is missing or unknown.
    """
    object_format: str = "{name}"
    array_format: str = "{type}[]"
    collection_format: str = "{type}[]"


JAVA_TYPES = TypeMapping(
    data_types={
        XSD.boolean: "boolean",
        XSD.byte: "byte",
        XSD.date: "java.util.Date",
        XSD.dateTime: "java.util.Date",
        XSD.time: "java.util.Date",
        XSD.decimal: "float",
        XSD.double: "double",
        XSD.float: "float",
        XSD.int: "int",
        XSD.integer: "int",
        XSD.long: "long",
        XSD.positiveInteger: "int",
        XSD.short: "short",
        XSD.string: "String",
        XSD.anyURI: "java.net.URL",
    },
    default_type="String",
    collection_format="Set<{type}>",
)

JS_TYPES = TypeMapping(
    data_types={
        XSD.boolean: "boolean",
        XSD.byte: "int",
        XSD.date: "date",
        XSD.dateTime: "date",
        XSD.time: "date",
        XSD.decimal: "float",
        XSD.double: "float",
        XSD.float: "float",
        XSD.int: "int",
        XSD.integer: "int",
        XSD.long: "int",
        XSD.positiveInteger: "int",
        XSD.short: "int",
        XSD.string: "string",
        XSD.anyURI: "string",
    },
    default_type="object",
    object_format="object<{iri}>",
)

PYTHON_TYPES = TypeMapping(
    data_types={
        XSD.boolean: "bool",
        XSD.byte: "int",
        XSD.date: "datetime.date",
        XSD.dateTime: "datetime.datetime",
        XSD.time: "datetime.time",
        XSD.decimal: "float",
        XSD.double: "float",
        XSD.float: "float",
        XSD.int: "int",
        XSD.integer: "int",
        XSD.long: "int",
        XSD.positiveInteger: "int",
        XSD.short: "int",
        XSD.string: "str",
        XSD.anyURI: "str",
    },
    default_type="str",
    array_format="List[{type}]",
    collection_format="Set[{type}]",
)


@dataclass
class PropertyClassifier:
    """
    Decides how a property is represented in generated code, see :class:`PropertyClassification`.
    """

    model: OntologyModel
    types: TypeMapping = JAVA_TYPES

    def classify(self, property_iri: Any) -> PropertyClassification:
        """
        Classify a property by its range and its functional axiom:

        * no range: a single value of the default type,
        * a known datatype: Value if functional, Array otherwise,
        * a class of the property's own namespace: Object if functional, Collection otherwise,
        * anything else is not supported and falls back to a single value of the default type.
        """
        range_iri = self.model.property_range(property_iri)
        functional = self.model.is_functional(property_iri)
        if range_iri is None:
            return PropertyClassification.VALUE
        if range_iri in self.types.data_types:
            return PropertyClassification.VALUE if functional else PropertyClassification.ARRAY
        if self.is_local(property_iri, range_iri):
            return (
                PropertyClassification.OBJECT
                if functional
                else PropertyClassification.COLLECTION
            )
        return PropertyClassification.VALUE

    @staticmethod
    def is_local(property_iri: Any, range_iri: Any) -> bool:
        return NamingRegistry.namespace(property_iri) == NamingRegistry.namespace(range_iri)

    def element_type(self, property_iri: Any) -> str:
        """
        The type of a single value of the property, e.g. 'int' or 'Person'.
        """
        range_iri = self.model.property_range(property_iri)
        if range_iri is None:
            return self.types.default_type
        if range_iri in self.types.data_types:
            return self.types.data_types[range_iri]
        if self.is_local(property_iri, range_iri):
            return self.types.object_format.format(
                name=NamingRegistry.class_name(range_iri), iri=str(range_iri)
            )
        return self.types.default_type

    def data_type(self, property_iri: Any) -> str:
        """
        The declared type of the generated field, e.g. 'Set<Person>'.
        """
        element_type = self.element_type(property_iri)
        classification = self.classify(property_iri)
        if classification == PropertyClassification.ARRAY:
            return self.types.array_format.format(type=element_type)
        if classification == PropertyClassification.COLLECTION:
            return self.types.collection_format.format(type=element_type)
        return element_type

    def range_class(self, property_iri: Any) -> Optional[Any]:
        """The range of an Object or Collection property, None for the other ones."""
        if self.classify(property_iri).is_reference:
            return self.model.property_range(property_iri)
        return None

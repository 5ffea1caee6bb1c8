"""
Target independent descriptions of the classes to generate. The emitters render their
templates from these.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field

from rdflib import URIRef
from rdflib.namespace import RDFS
from typing_extensions import Any, Dict, List, Optional

from . import logger
from .classifier import PropertyClassifier
from .exceptions import GenerationError
from .ontology_model import OntologyModel
from .utils import NamingRegistry, PropertyClassification, PropertyDirection


@dataclass
class PropertyInfo:
    """A property declared by a generated class."""

    iri: URIRef
    name: str
    """
    The field name, the local name of the property with a lower case first letter.
    """
    classification: PropertyClassification
    data_type: str
    element_type: str
    functional: bool
    inverse_functional: bool = False
    range: Optional[URIRef] = None
    range_class_name: Optional[str] = None
    """
    The class name of the range for Object and Collection properties.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    see_also: List[str] = field(default_factory=list)
    reverse: Optional[ReversePropertyInfo] = None
    """
    The inverse collection the range class keeps for this property, if it keeps one.
    """

    @property
    def upper_name(self) -> str:
        return NamingRegistry.upper_first(self.name)

    @property
    def python_name(self) -> str:
        return NamingRegistry.python_identifier(NamingRegistry.to_snake_case(self.name))

    @property
    def vocab_name(self) -> str:
        """Name of the constant in the vocabulary artifact."""
        return NamingRegistry.property_name(self.iri)


@dataclass
class ReversePropertyInfo:
    """
    The inverse side of an Object or Collection property, kept by the range class.
    E.g. for `Person knows Person` every person keeps the set of persons that know it.
    """

    property: PropertyInfo
    """
    The forward property, described from the point of view of its domain class.
    """
    source_type: str
    """
    Class name of the domain of the forward property.
    """
    source_iri: URIRef
    suffix: str = ""
    """
    Added to all names when a class has several inverse collections of the same source type.
    """

    @property
    def name(self) -> str:
        return NamingRegistry.plural(NamingRegistry.lower_first(self.source_type)) + self.suffix

    @property
    def getter_name(self) -> str:
        return "get" + NamingRegistry.plural(self.source_type) + self.suffix

    @property
    def adder_name(self) -> str:
        return "add" + self.source_type + self.suffix

    @property
    def parameter_name(self) -> str:
        return NamingRegistry.lower_first(self.source_type)

    @property
    def python_name(self) -> str:
        return NamingRegistry.to_snake_case(self.name)

    @property
    def python_adder_name(self) -> str:
        return NamingRegistry.to_snake_case(self.adder_name)

    @property
    def python_parameter_name(self) -> str:
        return NamingRegistry.python_identifier(
            NamingRegistry.to_snake_case(self.source_type)
        )

    @property
    def single_valued(self) -> bool:
        return self.property.classification == PropertyClassification.OBJECT


@dataclass
class ClassInfo:
    """Everything the emitters need to know about one ontology class."""

    iri: URIRef
    name: str
    superclass: Optional[URIRef] = None
    superclass_name: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    see_also: List[str] = field(default_factory=list)
    properties: List[PropertyInfo] = field(default_factory=list)
    reverse_properties: List[ReversePropertyInfo] = field(default_factory=list)

    @property
    def has_objects(self) -> bool:
        return any(
            p.classification == PropertyClassification.OBJECT for p in self.properties
        )

    @property
    def has_collections(self) -> bool:
        return bool(self.reverse_properties) or any(
            p.classification == PropertyClassification.COLLECTION
            for p in self.properties
        )

    @property
    def has_multi_valued(self) -> bool:
        return any(not p.functional for p in self.properties)

    @property
    def uses_factory(self) -> bool:
        """Whether loading the class needs an entity factory to create referenced entities."""
        return self.has_objects or self.has_collections

    @property
    def referenced_classes(self) -> List[str]:
        """Names of the other generated classes this class mentions, sorted."""
        names = {p.range_class_name for p in self.properties if p.range_class_name}
        names.update(r.source_type for r in self.reverse_properties)
        if self.superclass_name:
            names.add(self.superclass_name)
        names.discard(self.name)
        return sorted(names)


class ClassDescriber:
    """
    Derives :class:`ClassInfo` objects from the ontology model.
    """

    def __init__(self, model: OntologyModel, classifier: PropertyClassifier):
        """
        :param model: The ontology.
        :param classifier: The classifier of the target language.
        """
        self.model = model
        self.classifier = classifier
        self._reverse_cache: Dict[Any, List[ReversePropertyInfo]] = {}

    def describe(self, class_iri: URIRef) -> ClassInfo:
        """
        :raises GenerationError: If two fields of the class would get the same name.
        """
        superclass = self.model.superclass(class_iri)
        properties = [
            self.describe_property(p)
            for p in self.model.find_properties(class_iri, PropertyDirection.DOMAIN)
        ]
        properties.sort(key=lambda p: (p.name, str(p.iri)))
        info = ClassInfo(
            iri=class_iri,
            name=NamingRegistry.class_name(class_iri),
            superclass=superclass,
            superclass_name=(
                NamingRegistry.class_name(superclass) if superclass is not None else None
            ),
            title=self.model.title(class_iri),
            description=self.model.description(class_iri),
            see_also=self.model.see_also(class_iri),
            properties=properties,
            reverse_properties=self.reverse_properties(class_iri),
        )
        self.check_field_names(info)
        return info

    @staticmethod
    def check_field_names(info: ClassInfo):
        """
        Both the camel case and the snake case field names of a class must be unique across its
        properties and inverse collections.
        """
        fields = [(p.name, p.python_name, str(p.iri)) for p in info.properties]
        fields.extend(
            (r.name, r.python_name, f"inverse of {r.property.iri}")
            for r in info.reverse_properties
        )
        owners: Dict[str, str] = {}
        for name, python_name, owner in fields:
            for field_name in sorted({name, python_name}):
                if field_name in owners:
                    raise GenerationError(
                        f"{owners[field_name]} and {owner} are both named {field_name} in {info.name}",
                        str(info.iri),
                    )
            owners[name] = owner
            owners[python_name] = owner

    def describe_property(self, property_iri: URIRef, with_reverse: bool = True) -> PropertyInfo:
        classification = self.classifier.classify(property_iri)
        range_iri = self.model.property_range(property_iri)
        info = PropertyInfo(
            iri=property_iri,
            name=NamingRegistry.property_name(property_iri),
            classification=classification,
            data_type=self.classifier.data_type(property_iri),
            element_type=self.classifier.element_type(property_iri),
            functional=self.model.is_functional(property_iri),
            inverse_functional=self.model.is_inverse_functional(property_iri),
            range=range_iri,
            range_class_name=(
                NamingRegistry.class_name(range_iri)
                if classification.is_reference
                else None
            ),
            title=self.model.title(property_iri),
            description=self.model.description(property_iri),
            see_also=self.model.see_also(property_iri),
        )
        if with_reverse and classification.is_reference and not info.inverse_functional:
            info.reverse = next(
                (
                    r
                    for r in self.reverse_properties(range_iri)
                    if r.property.iri == property_iri
                ),
                None,
            )
        return info

    def reverse_properties(self, class_iri: Any) -> List[ReversePropertyInfo]:
        """
        The inverse collections of a class: one per Object or Collection property whose range is
        the class, except for inverse functional properties.
        """
        if class_iri in self._reverse_cache:
            return self._reverse_cache[class_iri]
        reverse_properties = []
        for property_iri in self.model.find_properties(class_iri, PropertyDirection.RANGE):
            if not self.is_reverse_candidate(property_iri):
                continue
            source_iri = self.model.first_object_iri(property_iri, RDFS.domain)
            if source_iri is None:
                logger.debug(
                    f"No domain class for {property_iri}, no inverse collection generated"
                )
                continue
            reverse_properties.append(
                ReversePropertyInfo(
                    property=self.describe_property(property_iri, with_reverse=False),
                    source_type=NamingRegistry.class_name(source_iri),
                    source_iri=source_iri,
                )
            )
        by_name = defaultdict(list)
        for reverse in reverse_properties:
            by_name[reverse.name].append(reverse)
        for clashing in by_name.values():
            if len(clashing) > 1:
                for reverse in clashing:
                    reverse.suffix = "By" + reverse.property.upper_name
        reverse_properties.sort(key=lambda r: (r.name, str(r.property.iri)))
        self._reverse_cache[class_iri] = reverse_properties
        return reverse_properties

    def is_reverse_candidate(self, property_iri: Any) -> bool:
        return self.classifier.classify(
            property_iri
        ).is_reference and not self.model.is_inverse_functional(property_iri)

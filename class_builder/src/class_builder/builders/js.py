from __future__ import annotations

from typing_extensions import Dict, List

from .base import ClassBuilder
from ..class_info import ClassInfo
from ..classifier import JS_TYPES


class JSMappingBuilder(ClassBuilder):
    """
    Generates a JavaScript module with one creator class per ontology class. A creator maps the
    property names of a class to their IRIs and types. The module exports a registry of creators
    keyed by class IRI.
    """

    types = JS_TYPES

    DEFAULT_SUPERCLASS = "Object"

    @property
    def mappers_file_name(self) -> str:
        return f"{self.require_vocab_name()}Mappers.js"

    def render(self, classes: List[ClassInfo]) -> Dict[str, str]:
        known = {c.name for c in classes}
        superclasses = {
            c.name: (
                c.superclass_name
                if c.superclass_name in known
                else self.DEFAULT_SUPERCLASS
            )
            for c in classes
        }
        return {
            self.mappers_file_name: self.renderer.render(
                "js_mappers.j2", classes=classes, superclasses=superclasses
            )
        }

from __future__ import annotations

from typing_extensions import List

from .base import EntityClassBuilder
from ..class_info import ClassInfo
from ..classifier import JAVA_TYPES


def java_load_type(element_type: str) -> str:
    """
    The type part of the runtime load helper for a scalar, e.g. 'String' for loadStringValue
    and 'Date' for java.util.Date.
    """
    simple_name = element_type.replace("[]", "").rsplit(".", 1)[-1]
    return simple_name[:1].upper() + simple_name[1:]


class JavaClassBuilder(EntityClassBuilder):
    """
    Generates one Java class per ontology class and the factory interface the generated classes
    use to create referenced entities.
    """

    types = JAVA_TYPES

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.renderer.env.filters["java_load_type"] = java_load_type

    @property
    def factory_name(self) -> str:
        return self.require_vocab_name() + "Factory"

    @property
    def default_superclass(self) -> str:
        return f"{self.settings.runtime_package}.RDFEntity"

    @property
    def vocab_import(self) -> str:
        if self.settings.vocab_package and self.settings.vocab_name:
            return f"{self.settings.vocab_package}.{self.settings.vocab_name}"
        return ""

    def class_file_name(self, info: ClassInfo) -> str:
        return f"{info.name}.java"

    def factory_file_name(self) -> str:
        return f"{self.factory_name}.java"

    def render_class(self, info: ClassInfo) -> str:
        return self.renderer.render(
            "java_class.j2",
            info=info,
            package=self.settings.effective_class_package,
            runtime_package=self.settings.runtime_package,
            vocab=self.require_vocab_name(),
            vocab_import=self.vocab_import,
            factory=self.factory_name,
            superclass=info.superclass_name or self.default_superclass,
        )

    def render_factory(self, classes: List[ClassInfo]) -> str:
        return self.renderer.render(
            "java_factory.j2",
            classes=sorted(classes, key=lambda c: c.name),
            package=self.settings.effective_class_package,
            runtime_package=self.settings.runtime_package,
            factory=self.factory_name,
        )

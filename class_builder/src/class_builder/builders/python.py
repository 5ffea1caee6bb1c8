from __future__ import annotations

from typing_extensions import Dict, Iterable, List

from .base import EntityClassBuilder
from .. import logger
from ..class_info import ClassInfo, PropertyInfo
from ..classifier import PYTHON_TYPES
from ..config import PYTHON_RUNTIME_PACKAGE
from ..exceptions import GenerationError
from ..utils import NamingRegistry, PropertyClassification


class PythonClassBuilder(EntityClassBuilder):
    """
    Generates one Python module per ontology class, holding a subclass of
    :class:`class_builder_runtime.RDFEntity`, and a factory module mapping the class IRIs to the
    generated classes.
    """

    types = PYTHON_TYPES

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.renderer.env.filters.update(
            annotation=self.annotation,
            initial_value=self.initial_value,
            xsd_datatype=self.xsd_datatype,
        )

    @staticmethod
    def module_name(name: str) -> str:
        return NamingRegistry.python_identifier(NamingRegistry.to_snake_case(name))

    @staticmethod
    def qualified(module: str, package: str) -> str:
        return f"{package}.{module}" if package else module

    def class_module(self, class_name: str) -> str:
        return self.qualified(
            self.module_name(class_name), self.settings.effective_class_package
        )

    @property
    def vocab_module(self) -> str:
        return self.qualified(
            self.module_name(self.require_vocab_name()), self.settings.vocab_package
        )

    @property
    def factory_name(self) -> str:
        return NamingRegistry.to_pascal_case(self.require_vocab_name()) + "Factory"

    def class_file_name(self, info: ClassInfo) -> str:
        return self.module_name(info.name) + ".py"

    def factory_file_name(self) -> str:
        return self.module_name(self.require_vocab_name()) + "_factory.py"

    @staticmethod
    def annotation(prop: PropertyInfo) -> str:
        if prop.classification.is_multi_valued:
            return prop.data_type
        return f"Optional[{prop.data_type}]"

    @staticmethod
    def initial_value(prop: PropertyInfo) -> str:
        if prop.classification == PropertyClassification.ARRAY:
            return "[]"
        if prop.classification == PropertyClassification.COLLECTION:
            return "set()"
        return "None"

    def xsd_datatype(self, prop: PropertyInfo) -> str:
        if prop.range is not None and prop.range in self.types.data_types:
            return f"XSD.{NamingRegistry.local_name(prop.range)}"
        return "None"

    def check_superclass(self, info: ClassInfo, known: Iterable[str]):
        if info.superclass is not None and str(info.superclass) not in set(known):
            logger.warning(
                f"Superclass {info.superclass} of {info.name} is not generated, "
                f"{info.name} extends RDFEntity"
            )
            info.superclass = None
            info.superclass_name = None

    def render(self, classes: List[ClassInfo]) -> Dict[str, str]:
        modules: Dict[str, ClassInfo] = {}
        for info in classes:
            module = self.module_name(info.name)
            if module in modules:
                raise GenerationError(
                    f"Classes {modules[module].name} and {info.name} map to the same module {module}",
                    str(info.iri),
                )
            modules[module] = info
        return super().render(classes)

    def typing_names(self, info: ClassInfo, type_imports: List[str]) -> List[str]:
        names = {"ClassVar"}
        for prop in info.properties:
            if prop.classification == PropertyClassification.ARRAY:
                names.add("List")
            elif prop.classification == PropertyClassification.COLLECTION:
                names.add("Set")
            else:
                names.add("Optional")
        if info.reverse_properties:
            names.add("Set")
        if type_imports:
            names.add("TYPE_CHECKING")
        return sorted(names)

    def render_class(self, info: ClassInfo) -> str:
        type_imports = [n for n in info.referenced_classes if n != info.superclass_name]
        literal_properties = [
            p for p in info.properties if not p.classification.is_reference
        ]
        return self.renderer.render(
            "python_class.j2",
            info=info,
            vocab=NamingRegistry.to_pascal_case(self.require_vocab_name()),
            vocab_module=self.vocab_module,
            runtime=PYTHON_RUNTIME_PACKAGE,
            module_of=self.class_module,
            type_imports=type_imports,
            typing_names=self.typing_names(info, type_imports),
            needs_datetime=any(
                p.element_type.startswith("datetime.") for p in literal_properties
            ),
            uses_xsd=any(self.xsd_datatype(p) != "None" for p in literal_properties),
            uses_link=bool(info.reverse_properties)
            or any(p.reverse is not None for p in info.properties),
        )

    def render_factory(self, classes: List[ClassInfo]) -> str:
        return self.renderer.render(
            "python_factory.j2",
            classes=sorted(classes, key=lambda c: c.name),
            vocab=self.require_vocab_name(),
            factory=self.factory_name,
            runtime=PYTHON_RUNTIME_PACKAGE,
            module_of=self.class_module,
        )

"""
Common machinery of the code generators: loading, class discovery, template rendering and
writing the generated files.
"""

from __future__ import annotations

import os
import re
from abc import ABC, abstractmethod

from jinja2 import Environment, FileSystemLoader
from jinja2.ext import loopcontrols
from rdflib import URIRef
from tqdm import tqdm
from typing_extensions import ClassVar, Dict, Iterable, List, Optional

from .. import logger
from ..class_info import ClassDescriber, ClassInfo
from ..classifier import JAVA_TYPES, PropertyClassifier, TypeMapping
from ..config import BuilderSettings
from ..exceptions import GenerationError, OutputDirectoryNotFoundError
from ..ontology_model import OntologyModel
from ..ordering import ClassOrderer
from ..utils import NamingRegistry

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "jinja")


def single_line(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def sentence(text: str) -> str:
    """Terminate a title or description with a period unless it already ends with punctuation."""
    return text if text.endswith((".", "!", "?")) else text + "."


def pydoc(text: str) -> str:
    """Escape text for a triple quoted Python docstring."""
    return text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')


class JinjaRenderer:
    """Renderer for generating source code using Jinja2 templates."""

    def __init__(self, template_dir: str = TEMPLATE_DIR, indent: str = "\t"):
        """
        Initialize the renderer.
        :param template_dir: Directory containing Jinja2 templates.
        :param indent: The indentation unit of the generated code.
        """
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            extensions=[loopcontrols],
        )
        self.env.filters.update(
            snake=NamingRegistry.to_snake_case,
            pascal=NamingRegistry.to_pascal_case,
            plural=NamingRegistry.plural,
            lower_first=NamingRegistry.lower_first,
            upper_first=NamingRegistry.upper_first,
            local_name=NamingRegistry.local_name,
            pyident=NamingRegistry.python_identifier,
            single_line=single_line,
            sentence=sentence,
            pydoc=pydoc,
        )
        self.env.globals.update(tab=indent, i1=indent, i2=indent * 2, i3=indent * 3)

    def render(self, template_name: str, **context) -> str:
        """
        Render a template with the given context.
        :param template_name: Name of the template file.
        :param context: Keyword arguments for the template context.
        :return: Rendered string.
        """
        template = self.env.get_template(template_name)
        return template.render(**context)


class ClassBuilder(ABC):
    """
    Base of the generators. A builder owns the ontology model it generates from and renders the
    files of one target language.
    """

    types: ClassVar[TypeMapping] = JAVA_TYPES
    """
    The type names of the target language.
    """

    def __init__(self, model: OntologyModel, settings: Optional[BuilderSettings] = None):
        self.model = model
        self.settings = settings or BuilderSettings()
        self.classifier = PropertyClassifier(model, self.types)
        self.describer = ClassDescriber(model, self.classifier)
        self.orderer = ClassOrderer()
        self.renderer = JinjaRenderer(indent=self.settings.indent)

    @classmethod
    def from_files(
        cls, paths: Iterable[str], settings: Optional[BuilderSettings] = None
    ) -> ClassBuilder:
        """
        Create a builder for the merged content of several ontology files.
        """
        settings = settings or BuilderSettings()
        model = OntologyModel.from_files(
            paths, settings.input_format, settings.preferred_language
        )
        return cls(model, settings)

    def load(self, path: str, input_format: Optional[str] = None) -> ClassBuilder:
        self.model.load(path, input_format or self.settings.input_format)
        return self

    def find_classes(self) -> List[URIRef]:
        """
        The ontology classes to generate. Anonymous classes are skipped and, if an include prefix
        is configured, so is every class outside of it.
        """
        classes = []
        for resource in self.model.find_classes():
            if not isinstance(resource, URIRef):
                logger.warning(f"Skipping resource {resource}, it is not an IRI")
                continue
            prefix = self.settings.include_prefix
            if prefix and not str(resource).startswith(prefix):
                logger.debug(f"Skipping {resource}, it is outside of {prefix}")
                continue
            classes.append(resource)
        return classes

    def describe_classes(self) -> List[ClassInfo]:
        """
        Describe every class to generate, ordered so that superclasses come first.

        :raises GenerationError: If two classes would get the same name.
        """
        classes = [self.describer.describe(iri) for iri in self.find_classes()]
        logger.info(f"Found classes: {', '.join(c.name for c in classes)}")
        names: Dict[str, ClassInfo] = {}
        for info in classes:
            if info.name in names:
                raise GenerationError(
                    f"Classes {names[info.name].iri} and {info.iri} are both named {info.name}",
                    str(info.iri),
                )
            names[info.name] = info
        return self.orderer.order(classes)

    def require_vocab_name(self) -> str:
        if not self.settings.vocab_name:
            raise GenerationError(
                f"{type(self).__name__} needs a vocabulary name to name the generated code after"
            )
        return self.settings.vocab_name

    @abstractmethod
    def render(self, classes: List[ClassInfo]) -> Dict[str, str]:
        """
        Render the generated code.

        :param classes: The classes to generate, superclasses first.
        :return: Dictionary mapping file names to their content.
        """

    def generate(
        self, output_dir: Optional[str] = None, reserved: Iterable[str] = ()
    ) -> List[str]:
        """
        Generate the code for all classes into a directory.

        :param output_dir: The output directory, the configured class directory if not given.
        :param reserved: File names other generators write into the same directory.
        :return: The paths of the written files.
        :raises OutputDirectoryNotFoundError: If the directory does not exist. Nothing is written then.
        :raises GenerationError: If a generated file would replace a reserved one. Nothing is
         written then.
        """
        output_dir = output_dir or self.settings.effective_class_dir
        self.check_output_dir(output_dir)
        files = self.render(self.describe_classes())
        clashes = sorted(set(files) & set(reserved))
        if clashes:
            raise GenerationError(
                f"{type(self).__name__} would overwrite {', '.join(clashes)} in {output_dir}"
            )
        paths = []
        for file_name, content in tqdm(
            files.items(),
            desc=f"Writing {type(self).__name__} output",
            disable=not self.settings.show_progress,
        ):
            path = os.path.join(output_dir, file_name)
            self.save_to_file(path, content)
            paths.append(path)
        return paths

    @staticmethod
    def check_output_dir(output_dir: str):
        if not os.path.isdir(output_dir):
            raise OutputDirectoryNotFoundError(output_dir)

    @staticmethod
    def save_to_file(path: str, content: str):
        logger.debug(f"Writing {path}")
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)


class EntityClassBuilder(ClassBuilder, ABC):
    """
    A generator that writes one file per class, plus one factory file.
    """

    @abstractmethod
    def class_file_name(self, info: ClassInfo) -> str: ...

    @abstractmethod
    def factory_file_name(self) -> str: ...

    @abstractmethod
    def render_class(self, info: ClassInfo) -> str: ...

    @abstractmethod
    def render_factory(self, classes: List[ClassInfo]) -> str: ...

    def render(self, classes: List[ClassInfo]) -> Dict[str, str]:
        self.require_vocab_name()
        known = {str(c.iri) for c in classes}
        files = {}
        for info in classes:
            self.check_superclass(info, known)
            logger.info(f"Generating {info.name}")
            files[self.class_file_name(info)] = self.render_class(info)
        if self.factory_file_name() in files:
            raise GenerationError(
                f"A class is generated into {self.factory_file_name()}, the file of the factory"
            )
        files[self.factory_file_name()] = self.render_factory(classes)
        return files

    def check_superclass(self, info: ClassInfo, known: Iterable[str]):
        """Hook for targets that cannot extend classes which are not generated."""

    def emit_class(self, class_iri: URIRef, output_dir: Optional[str] = None) -> str:
        """
        Generate the file of a single class.

        :return: The path of the written file.
        """
        output_dir = output_dir or self.settings.effective_class_dir
        self.check_output_dir(output_dir)
        self.require_vocab_name()
        info = self.describer.describe(URIRef(class_iri))
        self.check_superclass(info, {str(c) for c in self.find_classes()})
        path = os.path.join(output_dir, self.class_file_name(info))
        self.save_to_file(path, self.render_class(info))
        return path

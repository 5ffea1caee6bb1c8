from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

from rdflib import URIRef
from typing_extensions import Dict, List, Optional

from .base import ClassBuilder, JinjaRenderer
from .. import logger
from ..config import BuilderSettings
from ..exceptions import GenerationError
from ..ontology_model import OntologyModel
from ..utils import NamingRegistry


class VocabularyLanguage(str, Enum):
    JAVA = "java"
    PYTHON = "python"


@dataclass
class VocabularyTerm:
    """A constant of the vocabulary artifact."""

    iri: URIRef
    name: str
    title: Optional[str] = None
    description: Optional[str] = None


class VocabularyBuilder:
    """
    Generates the vocabulary artifact: one constant per class and property of the ontology.
    The generated classes refer to their properties through these constants.
    """

    def __init__(
        self,
        model: OntologyModel,
        settings: BuilderSettings,
        language: VocabularyLanguage = VocabularyLanguage.JAVA,
    ):
        self.model = model
        self.settings = settings
        self.language = VocabularyLanguage(language)
        self.renderer = JinjaRenderer(indent=settings.indent)

    @property
    def vocab_name(self) -> str:
        if not self.settings.vocab_name:
            raise GenerationError("The vocabulary needs a name")
        return self.settings.vocab_name

    @property
    def file_name(self) -> str:
        if self.language == VocabularyLanguage.PYTHON:
            return (
                NamingRegistry.python_identifier(NamingRegistry.to_snake_case(self.vocab_name))
                + ".py"
            )
        return self.vocab_name + ".java"

    def term_name(self, iri: URIRef, is_class: bool) -> str:
        if is_class:
            name = NamingRegistry.class_name(iri)
        else:
            name = NamingRegistry.property_name(iri)
        if self.language == VocabularyLanguage.PYTHON:
            name = NamingRegistry.python_identifier(name)
        return name

    def terms(self) -> List[VocabularyTerm]:
        """
        The constants of the vocabulary, sorted by IRI. When two terms map to the same name
        only the first one is kept.
        """
        classes = set(self.model.find_classes())
        terms: Dict[str, VocabularyTerm] = {}
        for iri in self.model.find_terms():
            name = self.term_name(iri, iri in classes)
            if name in terms:
                logger.warning(
                    f"Vocabulary term {iri} is named {name} like {terms[name].iri}, skipping it"
                )
                continue
            terms[name] = VocabularyTerm(
                iri=iri,
                name=name,
                title=self.model.title(iri),
                description=self.model.description(iri),
            )
        return list(terms.values())

    def render(self) -> str:
        namespace = self.model.namespace()
        template = (
            "python_vocabulary.j2"
            if self.language == VocabularyLanguage.PYTHON
            else "java_vocabulary.j2"
        )
        return self.renderer.render(
            template,
            vocab=(
                NamingRegistry.to_pascal_case(self.vocab_name)
                if self.language == VocabularyLanguage.PYTHON
                else self.vocab_name
            ),
            package=self.settings.vocab_package,
            namespace=namespace,
            prefix=self.model.prefix(namespace) or NamingRegistry.to_snake_case(self.vocab_name),
            terms=self.terms(),
        )

    def generate(self, output_dir: Optional[str] = None) -> str:
        """
        Write the vocabulary artifact.

        :param output_dir: The output directory, the configured vocabulary directory if not given.
        :return: The path of the written file.
        """
        output_dir = output_dir or self.settings.vocab_dir
        ClassBuilder.check_output_dir(output_dir)
        path = os.path.join(output_dir, self.file_name)
        logger.info(f"Generating vocabulary {self.vocab_name}")
        ClassBuilder.save_to_file(path, self.render())
        return path

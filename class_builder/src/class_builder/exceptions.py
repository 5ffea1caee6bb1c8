from __future__ import annotations

from dataclasses import dataclass

from typing_extensions import Optional


@dataclass
class OntologyFileNotFoundError(FileNotFoundError):
    """
    Raised when an ontology input file does not exist.
    """

    path: str

    def __post_init__(self):
        super().__init__(f"Ontology file {self.path} does not exist.")


@dataclass
class OutputDirectoryNotFoundError(FileNotFoundError):
    """
    Raised when the directory generated files should be written to does not exist.
    Nothing is written in that case.
    """

    path: str

    def __post_init__(self):
        super().__init__(f"Output directory {self.path} does not exist.")


@dataclass
class OntologyParseError(ValueError):
    """
    Raised when an ontology file cannot be parsed as RDF in the given or detected format.
    """

    path: str
    """
    The file that failed to parse.
    """

    format: Optional[str]
    """
    The rdflib format that was used, if one was determined.
    """

    reason: str
    """
    The message of the underlying parser error.
    """

    def __post_init__(self):
        super().__init__(
            f"Cannot parse {self.path} as {self.format or 'RDF'}: {self.reason}"
        )


@dataclass
class ConfigurationError(ValueError):
    """
    Raised for a missing or invalid generator option, e.g. no vocabulary name
    or an input format rdflib does not know.
    """

    message: str

    def __post_init__(self):
        super().__init__(self.message)


@dataclass
class GenerationError(RuntimeError):
    """
    Raised when an ontology structure cannot be represented in the generated code.
    """

    message: str
    iri: Optional[str] = None
    """
    The ontology term that could not be generated, if the error concerns a single one.
    """

    def __post_init__(self):
        if self.iri:
            super().__init__(f"{self.message} ({self.iri})")
        else:
            super().__init__(self.message)

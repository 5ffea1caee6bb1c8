from __future__ import annotations

from dataclasses import dataclass

from typing_extensions import Any


@dataclass
class UnknownEntityTypeError(KeyError):
    """
    Raised when an entity factory has no constructor for a class IRI.
    """

    class_iri: Any

    def __post_init__(self):
        super().__init__(f"No entity constructor registered for class {self.class_iri}")

    def __str__(self):
        return self.args[0]


@dataclass
class IncompatibleFactoryError(TypeError):
    """
    Raised when an entity is loaded with something that is not an entity factory.
    """

    factory: Any

    def __post_init__(self):
        super().__init__(
            f"Expected an EntityFactory to load referenced entities, got {type(self.factory).__name__}"
        )

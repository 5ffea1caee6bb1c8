"""
Support classes for entity classes generated by class_builder.
"""

from .entity import RDFEntity
from .exceptions import IncompatibleFactoryError, UnknownEntityTypeError
from .factory import EntityFactory
from .links import link
from .target_model import TargetModel

__all__ = [
    "RDFEntity",
    "EntityFactory",
    "TargetModel",
    "link",
    "IncompatibleFactoryError",
    "UnknownEntityTypeError",
]

from __future__ import annotations

import os
from dataclasses import dataclass, field

from typing_extensions import List, Optional

from .exceptions import ConfigurationError

DEFAULT_RUNTIME_PACKAGE = "io.github.radkovo.rdf4j.builder"
"""
Java package of the runtime support classes (RDFEntity, TargetModel, EntityFactory).
"""

PYTHON_RUNTIME_PACKAGE = "class_builder_runtime"


@dataclass
class BuilderSettings:
    """
    Options shared by all generators. The command line fills them in, library users
    may construct them directly.
    """

    vocab_name: Optional[str] = None
    """
    Name of the vocabulary artifact. The factory and the JavaScript registry are named after it.
    """
    vocab_package: str = ""
    vocab_dir: str = field(default_factory=os.getcwd)
    class_package: Optional[str] = None
    """
    Package of the generated classes, the vocabulary package if not given.
    """
    class_dir: Optional[str] = None
    """
    Output directory of the generated classes, the vocabulary directory if not given.
    """
    include_prefix: Optional[str] = None
    """
    If given, only classes whose IRI starts with this prefix are generated.
    """
    preferred_language: Optional[str] = None
    input_format: Optional[str] = None
    input_files: List[str] = field(default_factory=list)
    runtime_package: str = DEFAULT_RUNTIME_PACKAGE
    indent: str = "\t"
    show_progress: bool = False

    @property
    def effective_class_package(self) -> str:
        return self.vocab_package if self.class_package is None else self.class_package

    @property
    def effective_class_dir(self) -> str:
        return self.class_dir or self.vocab_dir

    def validate(self):
        """
        Check the options every run needs.

        :raises ConfigurationError: If the vocabulary name or the input files are missing.
        """
        if not self.vocab_name:
            raise ConfigurationError("Missing required option: vocab-name")
        if not self.input_files:
            raise ConfigurationError("No input files given")

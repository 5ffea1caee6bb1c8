"""
Command line interface of the generators.

The entity class generators write the vocabulary into the vocabulary directory and the classes
and their factory into the class directory. The JavaScript generator writes the mapper registry
into the class directory.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import traceback
from enum import Enum

from typing_extensions import List, Optional, Sequence

from . import handler, logger
from .builders.base import ClassBuilder
from .builders.java import JavaClassBuilder
from .builders.js import JSMappingBuilder
from .builders.python import PythonClassBuilder
from .builders.vocabulary import VocabularyBuilder, VocabularyLanguage
from .config import DEFAULT_RUNTIME_PACKAGE, BuilderSettings
from .exceptions import ConfigurationError, GenerationError, OntologyParseError
from .ontology_model import OntologyModel


class Target(str, Enum):
    """The language code is generated for."""

    JAVA = "java"
    JS = "js"
    PYTHON = "python"


class ArgumentParser(argparse.ArgumentParser):
    """Reports invalid arguments as :class:`ConfigurationError` instead of exiting."""

    def error(self, message):
        raise ConfigurationError(message)


def build_parser(prog: str = "class-builder", target: Optional[Target] = None) -> ArgumentParser:
    """
    :param prog: The program name shown in the usage.
    :param target: The fixed target of the program, None to let the user choose with -t.
    """
    parser = ArgumentParser(
        prog=prog,
        description="Generates source code from RDFS/OWL ontologies.",
        add_help=False,
    )
    parser.add_argument("files", nargs="*", metavar="input-file", help="the input file(s) to read from")
    parser.add_argument(
        "-f", "--format", metavar="format",
        help="mime-type of the input file (will try to guess if absent)",
    )
    parser.add_argument("-v", "--vocab-name", metavar="class-name", help="vocabulary class name")
    parser.add_argument(
        "-p", "--vocab-package", metavar="package", default="",
        help="vocabulary package declaration (will use default (empty) package if absent)",
    )
    parser.add_argument(
        "-P", "--class-package", metavar="package",
        help="class package declaration (will use the vocabulary package if absent)",
    )
    parser.add_argument(
        "-o", "--vocab-dir", metavar="path",
        help="the output directory for the vocabulary (current directory when absent)",
    )
    parser.add_argument(
        "-O", "--class-dir", metavar="path",
        help="the output directory for the classes (vocabulary directory when absent)",
    )
    parser.add_argument(
        "-I", "--include-prefix", metavar="prefix",
        help="only generate classes whose IRI starts with the prefix",
    )
    parser.add_argument(
        "-l", "--language", metavar="tag",
        help="preferred language of labels and comments",
    )
    parser.add_argument(
        "-r", "--runtime-package", metavar="package", default=DEFAULT_RUNTIME_PACKAGE,
        help="package of the Java runtime support classes",
    )
    if target is None:
        parser.add_argument(
            "-t", "--target", choices=[t.value for t in Target], default=Target.JAVA.value,
            help="the language to generate (java when absent)",
        )
    parser.add_argument("--progress", action="store_true", help="show a progress bar")
    parser.add_argument("--verbose", action="store_true", help="print debug messages")
    parser.add_argument("-h", "--help", action="store_true", help="print this help")
    return parser


def print_help(parser: argparse.ArgumentParser, error: Optional[str] = None):
    if error:
        print(error)
        print()
    parser.print_help(sys.stdout)


def settings_from_args(args: argparse.Namespace) -> BuilderSettings:
    settings = BuilderSettings(
        vocab_name=args.vocab_name,
        vocab_package=args.vocab_package,
        vocab_dir=args.vocab_dir or os.getcwd(),
        class_package=args.class_package,
        class_dir=args.class_dir,
        include_prefix=args.include_prefix,
        preferred_language=args.language,
        input_format=args.format,
        input_files=list(args.files),
        runtime_package=args.runtime_package,
        show_progress=args.progress,
    )
    settings.validate()
    return settings


def generate(target: Target, settings: BuilderSettings) -> List[str]:
    """
    Load the input files and generate the code of a target.

    :return: The paths of the written files.
    """
    target = Target(target)
    ClassBuilder.check_output_dir(settings.effective_class_dir)
    if target != Target.JS:
        ClassBuilder.check_output_dir(settings.vocab_dir)

    model = OntologyModel.from_files(
        settings.input_files, settings.input_format, settings.preferred_language
    )
    if target == Target.JS:
        return JSMappingBuilder(model, settings).generate()

    language = VocabularyLanguage.PYTHON if target == Target.PYTHON else VocabularyLanguage.JAVA
    vocabulary = VocabularyBuilder(model, settings, language)
    same_dir = os.path.abspath(settings.vocab_dir) == os.path.abspath(settings.effective_class_dir)
    builder_type = PythonClassBuilder if target == Target.PYTHON else JavaClassBuilder
    paths = builder_type(model, settings).generate(
        reserved=[vocabulary.file_name] if same_dir else ()
    )
    paths.append(vocabulary.generate())
    return paths


def run(argv: Optional[Sequence[str]] = None, target: Optional[Target] = None, prog: str = "class-builder") -> int:
    """
    Run a generator from command line arguments.

    :return: The exit status, 0 on success.
    """
    parser = build_parser(prog, target)
    try:
        args = parser.parse_args(argv)
        if args.help:
            print_help(parser)
            return 0
        settings = settings_from_args(args)
    except ConfigurationError as exc:
        print_help(parser, str(exc))
        return 1

    if args.verbose:
        handler.setLevel(logging.DEBUG)
    target = target or Target(args.target)

    try:
        paths = generate(target, settings)
    except ConfigurationError as exc:
        print_help(parser, str(exc))
        return 1
    except OntologyParseError as exc:
        print(f"Parse error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"I/O exception: {exc}", file=sys.stderr)
        return 1
    except GenerationError:
        traceback.print_exc()
        return 1
    logger.info(f"Generated {len(paths)} files")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run(argv)


def main_js(argv: Optional[Sequence[str]] = None) -> int:
    return run(argv, Target.JS, "class-builder-js")


def main_python(argv: Optional[Sequence[str]] = None) -> int:
    return run(argv, Target.PYTHON, "class-builder-py")

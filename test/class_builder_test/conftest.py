import os

import pytest

from class_builder.config import BuilderSettings
from class_builder.ontology_model import OntologyModel

DATASET_DIR = os.path.join(os.path.dirname(__file__), "dataset")


def dataset_path(name: str) -> str:
    return os.path.join(DATASET_DIR, name)


@pytest.fixture
def person_file():
    return dataset_path("person.ttl")


@pytest.fixture
def university_file():
    return dataset_path("university.ttl")


@pytest.fixture
def person_model(person_file):
    return OntologyModel.from_files([person_file])


@pytest.fixture
def university_model(university_file):
    return OntologyModel.from_files([university_file])


@pytest.fixture
def people_settings(tmp_path, person_file):
    return BuilderSettings(
        vocab_name="People",
        vocab_dir=str(tmp_path),
        input_files=[person_file],
    )


@pytest.fixture
def university_settings(tmp_path, university_file):
    return BuilderSettings(
        vocab_name="University",
        vocab_package="org.example.university",
        vocab_dir=str(tmp_path),
        input_files=[university_file],
    )


@pytest.fixture
def dataset_dir():
    return DATASET_DIR

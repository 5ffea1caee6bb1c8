import pytest
from rdflib import Graph, Namespace
from rdflib.namespace import RDF

from class_builder_runtime import EntityFactory, RDFEntity, UnknownEntityTypeError

EX = Namespace("http://example.org/runtime#")


class Animal(RDFEntity):
    CLASS_IRI = EX.Animal

    def __init__(self, iri):
        super().__init__(iri)
        self.friend = None
        self.loads = 0

    def load_from_model(self, graph, factory):
        super().load_from_model(graph, factory)
        self.loads += 1
        friends = self.object_iris(graph, EX.friend)
        self.friend = factory.resolve(graph, EX.Animal, friends[0]) if friends else None


class Dog(Animal):
    CLASS_IRI = EX.Dog


class Puppy(Dog):
    CLASS_IRI = EX.Puppy


@pytest.fixture
def factory():
    return EntityFactory({EX.Animal: Animal, EX.Dog: Dog, str(EX.Puppy): Puppy})


def test_create(factory):
    dog = factory.create(EX.Dog, EX.rex)
    assert isinstance(dog, Dog)
    assert dog.iri == EX.rex


def test_create_unknown_type(factory):
    with pytest.raises(UnknownEntityTypeError) as exc_info:
        factory.create(EX.Cat, EX.tom)
    assert isinstance(exc_info.value, KeyError)
    assert str(exc_info.value) == f"No entity constructor registered for class {EX.Cat}"


def test_register(factory):
    class Cat(Animal):
        CLASS_IRI = EX.Cat

    factory.register(EX.Cat, Cat)
    assert isinstance(factory.create(EX.Cat, EX.tom), Cat)


def test_resolve_picks_most_specific_type(factory):
    graph = Graph()
    graph.add((EX.rex, RDF.type, EX.Animal))
    graph.add((EX.rex, RDF.type, EX.Puppy))
    graph.add((EX.rex, RDF.type, EX.Dog))
    assert type(factory.resolve(graph, EX.Animal, EX.rex)) is Puppy


def test_resolve_ignores_unrelated_types(factory):
    graph = Graph()
    graph.add((EX.rex, RDF.type, EX.Animal))
    assert type(factory.resolve(graph, EX.Dog, EX.rex)) is Dog


def test_resolve_handles_cycles_and_caches(factory):
    graph = Graph()
    graph.add((EX.rex, RDF.type, EX.Dog))
    graph.add((EX.fido, RDF.type, EX.Dog))
    graph.add((EX.rex, EX.friend, EX.fido))
    graph.add((EX.fido, EX.friend, EX.rex))
    rex = factory.load(graph, EX.Dog, EX.rex)
    assert rex.friend.friend is rex
    assert rex.loads == 1
    assert factory.resolve(graph, EX.Dog, EX.rex) is rex
    factory.clear()
    assert factory.resolve(graph, EX.Dog, EX.rex) is not rex


def test_load_reads_every_graph_afresh(factory):
    first = Graph()
    first.add((EX.rex, RDF.type, EX.Dog))
    first.add((EX.rex, EX.friend, EX.fido))
    second = Graph()
    second.add((EX.rex, RDF.type, EX.Dog))
    second.add((EX.rex, EX.friend, EX.bello))

    rex = factory.load(first, EX.Dog, EX.rex)
    assert rex.friend.iri == EX.fido
    reloaded = factory.load(second, EX.Dog, EX.rex)
    assert reloaded is not rex
    assert reloaded.friend.iri == EX.bello
    assert rex.friend.iri == EX.fido

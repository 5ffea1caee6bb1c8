from rdflib import Namespace

from class_builder_runtime import RDFEntity, link

EX = Namespace("http://example.org/runtime#")


class Employee(RDFEntity):
    def __init__(self, iri):
        super().__init__(iri)
        self._employer = None
        self._projects = set()


class Company(RDFEntity):
    def __init__(self, iri):
        super().__init__(iri)
        self._employees = set()


class Project(RDFEntity):
    def __init__(self, iri):
        super().__init__(iri)
        self._employees = set()


def test_single_valued_link_moves_reverse_entry():
    alice = Employee(EX.alice)
    acme = Company(EX.acme)
    initech = Company(EX.initech)
    link(alice, "_employer", acme, "_employees", single_valued=True)
    assert alice._employer is acme
    assert alice in acme._employees
    link(alice, "_employer", initech, "_employees", single_valued=True)
    assert alice not in acme._employees
    assert alice in initech._employees


def test_single_valued_link_to_none_clears():
    alice = Employee(EX.alice)
    acme = Company(EX.acme)
    link(alice, "_employer", acme, "_employees", single_valued=True)
    link(alice, "_employer", None, "_employees", single_valued=True)
    assert alice._employer is None
    assert acme._employees == set()


def test_multi_valued_link():
    alice = Employee(EX.alice)
    apollo = Project(EX.apollo)
    gemini = Project(EX.gemini)
    link(alice, "_projects", apollo, "_employees", single_valued=False)
    link(alice, "_projects", gemini, "_employees", single_valued=False)
    link(alice, "_projects", gemini, "_employees", single_valued=False)
    assert alice._projects == {apollo, gemini}
    assert gemini._employees == {alice}

import os

import pytest
from rdflib import Namespace

from class_builder.builders.java import JavaClassBuilder, java_load_type
from class_builder.builders.vocabulary import VocabularyBuilder, VocabularyLanguage
from class_builder.config import BuilderSettings
from class_builder.exceptions import GenerationError, OutputDirectoryNotFoundError
from class_builder.ontology_model import OntologyModel

U = Namespace("http://example.org/university#")


def read(directory, name):
    with open(os.path.join(directory, name), encoding="utf-8") as f:
        return f.read()


@pytest.fixture
def people_output(person_model, people_settings):
    VocabularyBuilder(person_model, people_settings).generate()
    JavaClassBuilder(person_model, people_settings).generate()
    return people_settings.vocab_dir


@pytest.fixture
def university_builder(university_model, university_settings):
    return JavaClassBuilder(university_model, university_settings)


@pytest.fixture
def university_files(university_builder):
    return university_builder.render(university_builder.describe_classes())


def test_people_files(people_output):
    assert sorted(os.listdir(people_output)) == ["People.java", "PeopleFactory.java", "Person.java"]


def test_person_class(people_output):
    source = read(people_output, "Person.java")
    assert "package" not in source.split("import", 1)[0]
    assert "public class Person extends io.github.radkovo.rdf4j.builder.RDFEntity" in source
    assert 'public static final IRI CLASS_IRI = vf.createIRI("http://example.org/people#Person");' in source
    assert " * A person.\n * <p>\n * IRI: {@code <http://example.org/people#Person>}" in source
    assert "\tprivate Set<Person> knows;" in source
    assert "\tprivate String name;" in source
    assert "\tprivate Set<Person> persons;" in source
    assert "\t\tknows = new HashSet<>();" in source


def test_person_accessors(people_output):
    source = read(people_output, "Person.java")
    assert "public String getName() {" in source
    assert "public void setName(String name) {" in source
    assert "public Set<Person> getKnows() {" in source
    assert "setKnows" not in source
    assert "public void addKnows(Person item) {" in source
    assert "item.getPersons().add(this);" in source
    assert "public Set<Person> getPersons() {" in source
    assert "public void addPerson(Person person) {" in source
    assert "person.getKnows().add(this);" in source


def test_person_model_access(people_output):
    source = read(people_output, "Person.java")
    assert "addValue(target, People.name, name);" in source
    assert "addCollection(target, People.knows, knows);" in source
    assert "target.addAll(persons);" in source
    assert "if (!(efactory instanceof PeopleFactory))" in source
    assert "name = loadStringValue(m, People.name);" in source
    assert "Person item = factory.createPerson(iri);" in source


def test_factory(people_output):
    source = read(people_output, "PeopleFactory.java")
    assert "public interface PeopleFactory extends EntityFactory" in source
    assert "public Person createPerson(IRI iri);" in source


def test_vocabulary(people_output):
    source = read(people_output, "People.java")
    assert "public class People" in source
    assert 'public static final String NAMESPACE = "http://example.org/people#";' in source
    assert "public static final IRI Person;" in source
    assert 'knows = factory.createIRI("http://example.org/people#knows");' in source
    assert 'name = factory.createIRI("http://example.org/people#name");' in source


def test_package_and_vocabulary_import(university_files):
    source = university_files["Course.java"]
    assert source.startswith("package org.example.university;\n")
    assert "import org.example.university.University;" in source


def test_superclass_and_minimal_class(university_files):
    assert "public class Organization extends Agent" in university_files["Organization.java"]
    empty = university_files["Empty.java"]
    assert "public class Empty extends io.github.radkovo.rdf4j.builder.RDFEntity" in empty
    assert "import java.util.Set;" not in empty
    assert "instanceof" not in empty


def test_value_and_array_fields(university_files):
    person = university_files["Person.java"]
    assert "\t\tnickname = new String[0];" in person
    assert "age = loadIntValue(m, University.age);" in person
    assert "birthDate = loadDateValue(m, University.birthDate);" in person
    assert "nickname = loadStringArray(m, University.nickname);" in person
    assert "addArray(target, University.nickname, nickname);" in person
    assert "score = loadDoubleArray(m, University.score);" in university_files["Student.java"]


def test_object_properties_keep_reverse_in_sync(university_files):
    student = university_files["Student.java"]
    assert "if (this.advisor != null) this.advisor.getStudents().remove(this);" in student
    assert "if (advisor != null) advisor.getStudents().add(this);" in student
    assert "advisor = factory.createPerson(iri);" in student
    person = university_files["Person.java"]
    assert "public void addStudent(Student student) {" in person
    assert "student.setAdvisor(this);" in person
    assert "public void setHeadOf(Organization headOf) {\n\t\tthis.headOf = headOf;\n\t}" in person


def test_colliding_reverse_collections(university_files):
    course = university_files["Course.java"]
    assert "private Set<Student> studentsByAssists;" in course
    assert "public Set<Student> getStudentsByEnrolledIn() {" in course
    assert "public void addStudentByAssists(Student student) {" in course
    assert "student.getAssists().add(this);" in course
    assert "@see <a href=\"http://example.org/docs/course\">" in course


def test_factory_lists_every_class(university_files):
    factory = university_files["UniversityFactory.java"]
    for name in ["Agent", "Course", "Empty", "Organization", "Person", "PhdStudent", "Student"]:
        assert f"public {name} create{name}(IRI iri);" in factory


def test_generation_is_idempotent(university_model, university_settings, tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    JavaClassBuilder(university_model, university_settings).generate(str(first))
    JavaClassBuilder(university_model, university_settings).generate(str(second))
    assert sorted(os.listdir(first)) == sorted(os.listdir(second))
    for name in os.listdir(first):
        assert (first / name).read_bytes() == (second / name).read_bytes()


def test_missing_output_directory(person_model, people_settings, tmp_path):
    builder = JavaClassBuilder(person_model, people_settings)
    with pytest.raises(OutputDirectoryNotFoundError):
        builder.generate(str(tmp_path / "missing"))
    assert os.listdir(tmp_path) == []


def test_missing_vocabulary_name(person_model, tmp_path):
    builder = JavaClassBuilder(person_model, BuilderSettings(vocab_dir=str(tmp_path)))
    with pytest.raises(GenerationError):
        builder.generate()
    assert os.listdir(tmp_path) == []


def test_include_prefix(university_model, university_settings):
    university_settings.include_prefix = "http://example.org/university#P"
    builder = JavaClassBuilder(university_model, university_settings)
    assert [c.name for c in builder.describe_classes()] == ["Person", "PhdStudent"]


def test_emit_class(university_builder, tmp_path):
    path = university_builder.emit_class(U.Course, str(tmp_path))
    assert os.path.basename(path) == "Course.java"
    assert os.listdir(tmp_path) == ["Course.java"]


def test_duplicate_class_names(tmp_path):
    ontology = tmp_path / "clash.ttl"
    ontology.write_text(
        "@prefix owl: <http://www.w3.org/2002/07/owl#> .\n"
        "<http://example.org/a#Person> a owl:Class .\n"
        "<http://example.org/b#Person> a owl:Class .\n"
    )
    settings = BuilderSettings(vocab_name="Clash", vocab_dir=str(tmp_path))
    builder = JavaClassBuilder.from_files([str(ontology)], settings)
    with pytest.raises(GenerationError):
        builder.generate()


def test_java_load_type():
    assert java_load_type("String") == "String"
    assert java_load_type("int") == "Int"
    assert java_load_type("java.util.Date") == "Date"
    assert java_load_type("java.net.URL") == "URL"


def test_reserved_file_names_are_not_overwritten(university_builder, tmp_path):
    with pytest.raises(GenerationError) as exc_info:
        university_builder.generate(str(tmp_path), reserved=["University.java", "Course.java"])
    assert "would overwrite Course.java" in str(exc_info.value)
    assert os.listdir(tmp_path) == []


def test_builder_keeps_the_language_of_the_model(university_file):
    model = OntologyModel.from_files([university_file])
    title = model.title(U.Agent)
    JavaClassBuilder(model, BuilderSettings(vocab_name="University", preferred_language="de"))
    assert model.preferred_language is None
    assert model.title(U.Agent) == title

    settings = BuilderSettings(vocab_name="University", preferred_language="de")
    builder = JavaClassBuilder.from_files([university_file], settings)
    assert builder.model.title(U.Agent) == "Ein Akteur"

from __future__ import annotations

from dataclasses import dataclass

import pytest
from faker import Faker

from blueprint import BlueprintFactory, VariantMap, VariantMapList


@dataclass
class Pet:
    name: str
    type: str


@dataclass
class Person:
    name: str
    age: int
    pets: list[Pet]


@dataclass
class PetFactory(BlueprintFactory[Pet]):
    faker: Faker

    def blueprint(self) -> Pet:
        return Pet(self.faker.unique.first_name(), self.faker.random_element(["cat", "dog", "parrot"]))


@dataclass
class PersonFactory(BlueprintFactory[Person]):
    faker: Faker
    pet_factory: PetFactory

    def blueprint(self) -> Person:
        return Person(self.faker.unique.first_name(), self.faker.random_int(18, 99), self.pet_factory.create(2))


@pytest.fixture(name="pet_factory")
def pet_factory_fixture(faker: Faker) -> PetFactory:
    return PetFactory(faker)


@pytest.fixture(name="person_factory")
def person_factory_fixture(faker: Faker, pet_factory: PetFactory) -> PersonFactory:
    return PersonFactory(faker, pet_factory)


@pytest.fixture(name="toads")
def toads_fixture() -> VariantMapList:
    return VariantMapList(
        [
            VariantMap({"name": "toad", "type": "toad"}),
            VariantMap({"name": "toadette", "type": "toad"}),
        ]
    )


def test_composability(person_factory: PersonFactory, pet_factory: PetFactory, toads: VariantMapList) -> None:
    toad_factory = person_factory.with_(pet_factory.create, toads, "pets")

    expected_pets = pet_factory.create(toads)
    for person in toad_factory.create(3):
        assert person.pets == expected_pets

    # bindings are kept between calls
    for person in toad_factory.create(3):
        assert person.pets == expected_pets

    # original factory is unaltered
    assert person_factory.create() != toad_factory.create()
    assert all(pet.type != "toad" for pet in person_factory.create().pets)


def test_nested_factories_produce_fresh_relations(person_factory: PersonFactory) -> None:
    first, second = person_factory.create(2)

    assert first.pets is not second.pets
    assert {pet.name for pet in first.pets}.isdisjoint(pet.name for pet in second.pets)


def test_override_nested_relation(person_factory: PersonFactory, pet_factory: PetFactory) -> None:
    pets = pet_factory.create(VariantMapList([{"type": "goldfish"}]))

    person = person_factory.create({"pets": pets, "age": 42})

    assert person.pets == pets
    assert person.age == 42


def test_relation_with_count(person_factory: PersonFactory, pet_factory: PetFactory) -> None:
    crowded = person_factory.with_(pet_factory.create, 5, "pets")

    assert [len(person.pets) for person in crowded.create(3)] == [5, 5, 5]
    assert len(person_factory.create().pets) == 2

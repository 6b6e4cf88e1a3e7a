#!/usr/bin/env python3
import dataclasses

import pytest

from core.namespace import group_by_package, package_of, simple_name
from core.uml_model import ModelClass, ModelRel
from uml_types import QualifiedName


def test_duplicate_qualified_name_rejected(acme_model):
    with pytest.raises(ValueError):
        acme_model.add_class(ModelClass(QualifiedName("com.acme.Dog")))


def test_entities_are_immutable(acme_model):
    dog = acme_model.get_class(QualifiedName("com.acme.Dog"))
    with pytest.raises(dataclasses.FrozenInstanceError):
        dog.qualified_name = QualifiedName("com.acme.Cat")


def test_internal_and_external_classes(acme_model):
    assert [c.qualified_name for c in acme_model.external_classes] == ["java.util.UUID"]
    assert len(acme_model.internal_classes) == len(acme_model) - 1


def test_relationships_of_and_related_classes(acme_model):
    name = QualifiedName("com.acme.shop.Order")
    assert len(acme_model.relationships_of(name)) == 3
    related = [c.qualified_name for c in acme_model.related_classes(name)]
    # model declaration order, not relationship order
    assert related == ["com.acme.shop.LineItem", "com.acme.shop.Status", "java.util.UUID"]


def test_packages_in_first_seen_order(acme_model):
    assert acme_model.packages() == ["com.acme", "com.acme.shop"]
    assert [c.simple_name for c in acme_model.classes_in_package("com.acme.shop")] == ["Order", "LineItem", "Status"]


def test_validate_detects_dangling_relationship_end(acme_model):
    assert acme_model.validate()
    ghost = ModelClass(QualifiedName("com.acme.Ghost"))
    acme_model.add_relationship(ModelRel.dependency(acme_model.get_class("com.acme.Dog"), ghost))
    assert not acme_model.validate()
    with pytest.raises(ValueError, match="com.acme.Ghost"):
        acme_model.validate_and_raise()


def test_other_end():
    a, b = ModelClass(QualifiedName("p.A")), ModelClass(QualifiedName("p.B"))
    rel = ModelRel.generalization(a, b)
    assert rel.other_end(a.qualified_name) is b
    assert rel.other_end(b.qualified_name) is a
    assert rel.involves(a.qualified_name) and not rel.involves(QualifiedName("p.C"))


def test_namespace_helpers(acme_model):
    assert package_of(QualifiedName("com.acme.Foo")) == "com.acme"
    assert package_of(QualifiedName("Foo")) == ""
    assert simple_name(QualifiedName("com.acme.Foo")) == "Foo"
    groups = group_by_package(acme_model)
    assert list(groups) == ["com.acme", "com.acme.shop", "java.util"]
    assert [c.simple_name for c in groups["com.acme"]] == ["Animal", "Pet", "Dog"]

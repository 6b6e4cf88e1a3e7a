import os
import sys

import pytest

# Ensure project root is first on sys.path so local packages like `core` are used
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from core.uml_model import (  # noqa: E402
    AssociationEndpoint, FieldDescriptor, MethodDescriptor, Model, ModelClass,
    ModelRel, Parameter, TypeReference
)
from uml_types import ElementKind, Multiplicity, QualifiedName, TypeName, Visibility  # noqa: E402


def t(name: str, *args: TypeReference) -> TypeReference:
    return TypeReference(TypeName(name), tuple(args))


@pytest.fixture
def acme_model() -> Model:
    """Small model: an order with line items, an animal hierarchy and one library class."""
    model = Model()
    animal = model.add_class(ModelClass(
        QualifiedName("com.acme.Animal"),
        kind=ElementKind.CLASS,
        fields=(FieldDescriptor("name", t("String"), Visibility.PROTECTED),),
        methods=(
            MethodDescriptor("speak", t("String"), is_abstract=True),
            MethodDescriptor("getName", t("String")),
        ),
    ))
    pet = model.add_class(ModelClass(
        QualifiedName("com.acme.Pet"),
        kind=ElementKind.INTERFACE,
        methods=(MethodDescriptor("owner", t("String"), is_abstract=True),),
    ))
    dog = model.add_class(ModelClass(
        QualifiedName("com.acme.Dog"),
        methods=(
            MethodDescriptor("speak", t("String")),
            MethodDescriptor("fetch", t("void"), (Parameter("thing", t("Object")),)),
            MethodDescriptor("fetch", t("void"), (Parameter("thing", t("Object")), Parameter("times", t("int")))),
            MethodDescriptor("wag", t("void"), visibility=Visibility.PRIVATE),
        ),
    ))
    order = model.add_class(ModelClass(
        QualifiedName("com.acme.shop.Order"),
        fields=(
            FieldDescriptor("id", t("long")),
            FieldDescriptor("items", t("List", t("LineItem"))),
            FieldDescriptor("COUNT", t("int"), Visibility.PUBLIC, is_static=True),
        ),
        methods=(MethodDescriptor("getItems", t("List", t("LineItem"))),),
    ))
    item = model.add_class(ModelClass(QualifiedName("com.acme.shop.LineItem")))
    status = model.add_class(ModelClass(QualifiedName("com.acme.shop.Status"), kind=ElementKind.ENUM))
    uuid = model.add_class(ModelClass(QualifiedName("java.util.UUID"), is_internal=False))

    model.add_relationship(ModelRel.generalization(dog, animal))
    model.add_relationship(ModelRel.realization(dog, pet))
    model.add_relationship(ModelRel.association(
        order, item, None, AssociationEndpoint("items", Multiplicity.MANY)))
    model.add_relationship(ModelRel.dependency(order, status))
    model.add_relationship(ModelRel.dependency(order, uuid))
    model.add_relationship(ModelRel.dependency(item, animal))
    return model

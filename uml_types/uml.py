#!/usr/bin/env python3
"""
UML-specific types and enums for uml2puml project.
"""

from typing import NewType
from enum import Enum

# ---------- Type aliases for UML elements ----------
QualifiedName = NewType('QualifiedName', str)
TypeName = NewType('TypeName', str)
PackageName = NewType('PackageName', str)

# ---------- Enums for UML elements ----------
class ElementKind(Enum):
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"

class Visibility(Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PACKAGE = "package"
    PRIVATE = "private"

class Multiplicity(Enum):
    """Cardinality of an association endpoint."""
    ONE = "1"
    ZERO_OR_ONE = "0..1"
    MANY = "*"

class RelationshipKind(Enum):
    GENERALIZATION = "generalization"
    REALIZATION = "realization"
    DEPENDENCY = "dependency"
    ASSOCIATION = "association"

class DetailMode(Enum):
    """Which compartments of a class node are shown, and at what fidelity."""
    EMPTY = "empty"
    HIDDEN = "hidden"
    FIELDS = "fields"
    METHODS = "methods"
    FIELDS_AND_METHODS = "fields_and_methods"
    SUMMARY = "summary"

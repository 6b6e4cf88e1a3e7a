#!/usr/bin/env python3
"""
Core module: the object model rendered into diagrams.
"""

from .uml_model import (
    Model, ModelClass, ModelRel, FieldDescriptor, MethodDescriptor, Parameter,
    TypeReference, AssociationEndpoint
)

__all__ = [
    'Model', 'ModelClass', 'ModelRel', 'FieldDescriptor', 'MethodDescriptor',
    'Parameter', 'TypeReference', 'AssociationEndpoint'
]

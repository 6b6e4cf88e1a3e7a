#!/usr/bin/env python3
"""
Types module for uml2puml project.
Centralized type definitions organized by domain.
"""

# Public types export
from .uml import (
    ElementKind, Visibility, Multiplicity, RelationshipKind, DetailMode,
    QualifiedName, TypeName, PackageName
)

from .raw import (
    RawModelData, RawClassData, RawFieldData, RawMethodData,
    RawParameterData, RawRelationshipData, RawEndpointData
)

from .protocols import (
    TypeRef, MemberDoc
)

__all__ = [
    # UML types
    'ElementKind', 'Visibility', 'Multiplicity', 'RelationshipKind', 'DetailMode',
    'QualifiedName', 'TypeName', 'PackageName',

    # Raw document types
    'RawModelData', 'RawClassData', 'RawFieldData', 'RawMethodData',
    'RawParameterData', 'RawRelationshipData', 'RawEndpointData',

    # Protocols
    'TypeRef', 'MemberDoc'
]

#!/usr/bin/env python3
"""
Object model handed to the PlantUML renderers.

Entities are immutable once built; the Model container is filled by a
collaborator (see adapters/) and only read during rendering.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from uml_types import (
    ElementKind, Visibility, Multiplicity, RelationshipKind,
    QualifiedName, TypeName, PackageName
)

from .namespace import package_of, simple_name as _simple_name

# ---------- Type references ----------
@dataclass(frozen=True)
class TypeReference:
    name: TypeName
    arguments: Tuple['TypeReference', ...] = ()

    @property
    def depth(self) -> int:
        """Generic nesting depth: 0 for a plain name, 1 for List<String>, ..."""
        if not self.arguments:
            return 0
        return 1 + max(arg.depth for arg in self.arguments)

    @classmethod
    def parse(cls, text: str) -> 'TypeReference':
        """Build a reference from an expression such as ``Map<String, List<Long>>``."""
        text = (text or "").strip()
        if not text:
            raise ValueError("Empty type expression")
        if '<' not in text:
            if '>' in text:
                raise ValueError(f"Unbalanced type expression: {text!r}")
            return cls(TypeName(text))
        if not text.endswith('>'):
            raise ValueError(f"Malformed type expression: {text!r}")
        base = text.split('<', 1)[0].strip()
        if not base:
            raise ValueError(f"Missing type name in: {text!r}")
        args_str = text[text.find('<') + 1:-1]
        # split by top-level commas
        args: List[str] = []
        buf: List[str] = []
        depth = 0
        for ch in args_str:
            if ch == '<':
                depth += 1
            elif ch == '>':
                depth -= 1
                if depth < 0:
                    raise ValueError(f"Unbalanced type expression: {text!r}")
            if ch == ',' and depth == 0:
                args.append(''.join(buf))
                buf = []
            else:
                buf.append(ch)
        if depth != 0:
            raise ValueError(f"Unbalanced type expression: {text!r}")
        args.append(''.join(buf))
        return cls(TypeName(base), tuple(cls.parse(arg) for arg in args))


# ---------- Member structures ----------
@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    type: TypeReference
    visibility: Visibility = Visibility.PRIVATE
    is_static: bool = False

    @property
    def is_abstract(self) -> bool:
        return False


@dataclass(frozen=True)
class Parameter:
    name: str
    type: TypeReference


@dataclass(frozen=True)
class MethodDescriptor:
    name: str
    return_type: TypeReference
    parameters: Tuple[Parameter, ...] = ()
    visibility: Visibility = Visibility.PUBLIC
    is_static: bool = False
    is_abstract: bool = False


# ---------- Class structure ----------
@dataclass(frozen=True)
class ModelClass:
    qualified_name: QualifiedName
    kind: ElementKind = ElementKind.CLASS
    fields: Tuple[FieldDescriptor, ...] = ()
    methods: Tuple[MethodDescriptor, ...] = ()
    visibility: Visibility = Visibility.PUBLIC
    is_internal: bool = True  # False for library classes only referenced by relationships

    @property
    def package(self) -> PackageName:
        return package_of(self.qualified_name)

    @property
    def simple_name(self) -> str:
        return _simple_name(self.qualified_name)

    @property
    def public_methods(self) -> List[MethodDescriptor]:
        return [m for m in self.methods if m.visibility == Visibility.PUBLIC]


# ---------- Relationship structures ----------
@dataclass(frozen=True)
class AssociationEndpoint:
    role: Optional[str] = None
    multiplicity: Optional[Multiplicity] = None


@dataclass(frozen=True)
class ModelRel:
    """An edge between two classes, tagged by relationship kind.

    Only associations carry endpoints; either endpoint may be absent (None),
    which is distinct from an endpoint with neither role nor multiplicity.
    """
    kind: RelationshipKind
    source: ModelClass
    destination: ModelClass
    source_endpoint: Optional[AssociationEndpoint] = None
    destination_endpoint: Optional[AssociationEndpoint] = None

    def __post_init__(self):
        if self.kind != RelationshipKind.ASSOCIATION and (
                self.source_endpoint is not None or self.destination_endpoint is not None):
            raise ValueError(f"Only associations carry endpoints, got {self.kind.value}")

    @classmethod
    def generalization(cls, src: ModelClass, dest: ModelClass) -> 'ModelRel':
        return cls(RelationshipKind.GENERALIZATION, src, dest)

    @classmethod
    def realization(cls, src: ModelClass, dest: ModelClass) -> 'ModelRel':
        return cls(RelationshipKind.REALIZATION, src, dest)

    @classmethod
    def dependency(cls, src: ModelClass, dest: ModelClass) -> 'ModelRel':
        return cls(RelationshipKind.DEPENDENCY, src, dest)

    @classmethod
    def association(cls, src: ModelClass, dest: ModelClass,
                    src_endpoint: Optional[AssociationEndpoint] = None,
                    dest_endpoint: Optional[AssociationEndpoint] = None) -> 'ModelRel':
        return cls(RelationshipKind.ASSOCIATION, src, dest, src_endpoint, dest_endpoint)

    def involves(self, qualified_name: QualifiedName) -> bool:
        return qualified_name in (self.source.qualified_name, self.destination.qualified_name)

    def other_end(self, qualified_name: QualifiedName) -> ModelClass:
        """Return the class at the opposite end from the given one."""
        if self.source.qualified_name == qualified_name:
            return self.destination
        return self.source


# ---------- Model container ----------
@dataclass
class Model:
    classes: Dict[QualifiedName, ModelClass] = field(default_factory=dict)
    relationships: List[ModelRel] = field(default_factory=list)

    def add_class(self, model_class: ModelClass) -> ModelClass:
        if model_class.qualified_name in self.classes:
            raise ValueError(f"Duplicate class in model: {model_class.qualified_name}")
        self.classes[model_class.qualified_name] = model_class
        return model_class

    def add_relationship(self, rel: ModelRel) -> ModelRel:
        self.relationships.append(rel)
        return rel

    def get_class(self, qualified_name: QualifiedName) -> Optional[ModelClass]:
        return self.classes.get(qualified_name)

    def __iter__(self) -> Iterator[ModelClass]:
        return iter(self.classes.values())

    def __len__(self) -> int:
        return len(self.classes)

    @property
    def internal_classes(self) -> List[ModelClass]:
        return [c for c in self.classes.values() if c.is_internal]

    @property
    def external_classes(self) -> List[ModelClass]:
        return [c for c in self.classes.values() if not c.is_internal]

    def relationships_of(self, qualified_name: QualifiedName) -> List[ModelRel]:
        """Get all relationships with the given class at either end."""
        return [rel for rel in self.relationships if rel.involves(qualified_name)]

    def related_classes(self, qualified_name: QualifiedName) -> List[ModelClass]:
        """Get the classes sharing a relationship with the given class, in model order."""
        related = {rel.other_end(qualified_name).qualified_name
                   for rel in self.relationships_of(qualified_name)}
        related.discard(qualified_name)
        return [c for name, c in self.classes.items() if name in related]

    def packages(self) -> List[PackageName]:
        """Packages holding at least one internal class, in first-seen order."""
        seen: Dict[PackageName, None] = {}
        for model_class in self.internal_classes:
            seen.setdefault(model_class.package, None)
        return list(seen)

    def classes_in_package(self, package: PackageName) -> List[ModelClass]:
        return [c for c in self.classes.values() if c.package == package]

    def _validate_model_consistency(self) -> None:
        """Validate that every relationship end is a class of this model."""
        for rel in self.relationships:
            for end in (rel.source, rel.destination):
                if end.qualified_name not in self.classes:
                    raise ValueError(
                        f"{rel.kind.value.capitalize()} references class not in model: {end.qualified_name}")

    def validate(self) -> bool:
        """Validate the entire model and return True if valid."""
        try:
            self._validate_model_consistency()
            return True
        except ValueError:
            return False

    def validate_and_raise(self) -> None:
        """Validate the entire model and raise ValueError if invalid."""
        self._validate_model_consistency()

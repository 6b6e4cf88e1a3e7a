"""
Builds a Model from a declarative model description (JSON, YAML or a decoded dict).

Expected shape::

    classes:
      - name: com.acme.Order
        kind: class            # class | interface | enum
        visibility: public
        external: false
        fields:
          - {name: id, type: long, visibility: private, static: false}
        methods:
          - name: getItems
            returns: List<LineItem>
            parameters: [{name: filter, type: String}]
            visibility: public
    relationships:
      - kind: association      # generalization | realization | dependency | association
        source: com.acme.Order
        destination: com.acme.LineItem
        source_end: null
        destination_end: {role: items, multiplicity: "*"}
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, Tuple

import orjson
import yaml

from core.uml_model import (
    AssociationEndpoint, FieldDescriptor, MethodDescriptor, Model, ModelClass,
    ModelRel, Parameter, TypeReference
)
from uml_types import (
    ElementKind, Multiplicity, QualifiedName, RelationshipKind, TypeName, Visibility,
    RawClassData, RawEndpointData, RawFieldData, RawMethodData, RawModelData,
    RawRelationshipData
)

logger = logging.getLogger(__name__)

VOID = TypeReference(TypeName("void"))

_VISIBILITY_ALIASES: Dict[str, Visibility] = {
    "package-private": Visibility.PACKAGE,
    "package_private": Visibility.PACKAGE,
    "default": Visibility.PACKAGE,
}


class ModelBuilder:
    def __init__(self, j: RawModelData) -> None:
        self.j = j
        self.model = Model()

    @staticmethod
    def choose_name(el: Dict[str, Any]) -> Optional[str]:
        return el.get("qualified_name") or el.get("name")

    @staticmethod
    def parse_kind(value: Any) -> ElementKind:
        kind_raw = str(value or "").lower()
        if "interface" in kind_raw:
            return ElementKind.INTERFACE
        if "enum" in kind_raw:
            return ElementKind.ENUM
        return ElementKind.CLASS

    @staticmethod
    def parse_visibility(value: Any, default: Visibility, owner: str) -> Visibility:
        if value is None:
            return default
        if isinstance(value, Visibility):
            return value
        raw = str(value).strip().lower()
        if raw in _VISIBILITY_ALIASES:
            return _VISIBILITY_ALIASES[raw]
        try:
            return Visibility(raw)
        except ValueError:
            logger.warning(f"Unknown visibility '{value}' on {owner}, using private")
            return Visibility.PRIVATE

    @staticmethod
    def parse_multiplicity(value: Any, owner: str) -> Optional[Multiplicity]:
        if value is None or value == "":
            return None
        if isinstance(value, Multiplicity):
            return value
        raw = str(value).strip()
        try:
            return Multiplicity(raw)
        except ValueError:
            pass
        try:
            return Multiplicity[raw.upper()]
        except KeyError:
            logger.warning(f"Unknown multiplicity '{value}' on {owner}, leaving it unset")
            return None

    @staticmethod
    def parse_type(value: Any) -> TypeReference:
        if isinstance(value, TypeReference):
            return value
        if isinstance(value, dict):
            name = value.get("name")
            if not name:
                raise ValueError(f"Type without a name: {value!r}")
            args = value.get("arguments") or value.get("args") or []
            return TypeReference(TypeName(str(name)), tuple(ModelBuilder.parse_type(a) for a in args))
        return TypeReference.parse(str(value))

    _TRUE = ("true", "yes", "1")
    _FALSE = ("false", "no", "0", "")

    @classmethod
    def _flag(cls, el: Dict[str, Any], key: str) -> bool:
        value = el.get(key, el.get(f"is_{key}", False))
        if isinstance(value, str):
            text = value.strip().lower()
            if text in cls._TRUE:
                return True
            if text not in cls._FALSE:
                raise ValueError(f"Invalid boolean for '{key}': {value!r}")
            return False
        if value is None:
            return False
        if isinstance(value, (bool, int)):
            return bool(value)
        raise ValueError(f"Invalid boolean for '{key}': {value!r}")

    def build_field(self, el: RawFieldData, owner: str) -> Optional[FieldDescriptor]:
        name = el.get("name")
        type_raw = el.get("type")
        if not name or not type_raw:
            logger.warning(f"Skipping invalid field data on {owner}: {el!r}")
            return None
        return FieldDescriptor(
            name=str(name),
            type=self.parse_type(type_raw),
            visibility=self.parse_visibility(el.get("visibility"), Visibility.PRIVATE, f"{owner}.{name}"),
            is_static=self._flag(el, "static"),
        )

    def build_parameters(self, raw: List[Any], owner: str) -> Tuple[Parameter, ...]:
        params: List[Parameter] = []
        for i, p in enumerate(raw or []):
            if isinstance(p, (list, tuple)) and len(p) == 2:
                param_name, param_type = p
            elif isinstance(p, dict):
                param_name, param_type = p.get("name"), p.get("type")
            else:
                param_name, param_type = None, None
            if not param_type:
                logger.warning(f"Skipping invalid parameter data on {owner}: {p!r}")
                continue
            params.append(Parameter(name=str(param_name or f"p{i}"), type=self.parse_type(param_type)))
        return tuple(params)

    def build_method(self, el: RawMethodData, owner: str) -> Optional[MethodDescriptor]:
        name = el.get("name")
        if not name:
            logger.warning(f"Skipping method without a name on {owner}")
            return None
        returns = el.get("returns", el.get("return_type"))
        qualified = f"{owner}.{name}"
        return MethodDescriptor(
            name=str(name),
            return_type=self.parse_type(returns) if returns else VOID,
            parameters=self.build_parameters(el.get("parameters", []), qualified),
            visibility=self.parse_visibility(el.get("visibility"), Visibility.PUBLIC, qualified),
            is_static=self._flag(el, "static"),
            is_abstract=self._flag(el, "abstract"),
        )

    def build_class(self, el: RawClassData) -> ModelClass:
        name = self.choose_name(el)
        if not name:
            raise ValueError(f"Class without a name: {el!r}")
        fields = (self.build_field(f, name) for f in el.get("fields", []) or [])
        methods = (self.build_method(m, name) for m in el.get("methods", []) or [])
        return ModelClass(
            qualified_name=QualifiedName(str(name)),
            kind=self.parse_kind(el.get("kind")),
            fields=tuple(f for f in fields if f is not None),
            methods=tuple(m for m in methods if m is not None),
            visibility=self.parse_visibility(el.get("visibility"), Visibility.PUBLIC, name),
            is_internal=not el.get("external", False),
        )

    def resolve_class(self, name: Any, rel: RawRelationshipData) -> ModelClass:
        if not name:
            raise ValueError(f"Relationship end without a class name: {rel!r}")
        qname = QualifiedName(str(name))
        found = self.model.get_class(qname)
        if found is not None:
            return found
        logger.warning(f"Materialized relationship end as external class: '{qname}'")
        return self.model.add_class(ModelClass(qualified_name=qname, is_internal=False))

    def build_endpoint(self, el: RawEndpointData, owner: str) -> Optional[AssociationEndpoint]:
        if el is None:
            return None
        role = el.get("role")
        return AssociationEndpoint(
            role=str(role) if role else None,
            multiplicity=self.parse_multiplicity(el.get("multiplicity"), owner),
        )

    def build_relationship(self, el: RawRelationshipData) -> ModelRel:
        kind_raw = str(el.get("kind") or el.get("type") or "").lower()
        try:
            kind = RelationshipKind(kind_raw)
        except ValueError:
            raise ValueError(f"Unknown relationship kind: {kind_raw!r}") from None
        src = self.resolve_class(el.get("source"), el)
        dest = self.resolve_class(el.get("destination"), el)
        if kind != RelationshipKind.ASSOCIATION:
            if el.get("source_end") is not None or el.get("destination_end") is not None:
                logger.warning(f"Ignoring endpoints on {kind.value} {src.qualified_name} -> {dest.qualified_name}")
            return ModelRel(kind, src, dest)
        owner = f"association {src.qualified_name} -> {dest.qualified_name}"
        return ModelRel.association(
            src, dest,
            self.build_endpoint(el.get("source_end"), owner),
            self.build_endpoint(el.get("destination_end"), owner),
        )

    def build(self) -> Model:
        for el in self.j.get("classes", []) or []:
            if not isinstance(el, dict):
                logger.warning(f"Skipping non-mapping class entry: {el!r}")
                continue
            self.model.add_class(self.build_class(el))
        for el in self.j.get("relationships", []) or []:
            if not isinstance(el, dict):
                logger.warning(f"Skipping non-mapping relationship entry: {el!r}")
                continue
            self.model.add_relationship(self.build_relationship(el))
        logger.debug(f"Built model: {len(self.model.classes)} classes, {len(self.model.relationships)} relationships")
        return self.model


def model_from_dict(data: RawModelData) -> Model:
    if not isinstance(data, dict):
        raise ValueError("Model description must be a mapping")
    return ModelBuilder(data).build()


def load_model(path: str) -> Model:
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Model description not found: {path}")
    if path.lower().endswith(('.yml', '.yaml')):
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    else:
        with open(path, 'rb') as f:
            try:
                data = orjson.loads(f.read())
            except orjson.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in {path}: {e}") from e
    return model_from_dict(data)


__all__ = ["ModelBuilder", "model_from_dict", "load_model"]

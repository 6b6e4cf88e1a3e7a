#!/usr/bin/env python3
"""
XMI reader for uml2puml project.
Builds a Model from a UML2 XMI document (Papyrus / Eclipse UML2 style).
"""

from __future__ import annotations

import logging
import os
from typing import IO, Dict, List, Optional, Tuple, Union

from lxml import etree

from core.namespace import SEPARATOR
from core.uml_model import (
    AssociationEndpoint, FieldDescriptor, MethodDescriptor, Model, ModelClass,
    ModelRel, Parameter, TypeReference
)
from meta import XmlMetaModel
from uml_types import ElementKind, Multiplicity, QualifiedName, TypeName, Visibility

logger = logging.getLogger(__name__)

CLASSIFIER_KINDS: Dict[str, ElementKind] = {
    "uml:Class": ElementKind.CLASS,
    "uml:Interface": ElementKind.INTERFACE,
    "uml:Enumeration": ElementKind.ENUM,
}
PACKAGE_TYPES = frozenset({"uml:Package", "uml:Model"})
DEPENDENCY_TYPES = frozenset({"uml:Dependency", "uml:Usage"})
ASSOCIATION_TYPES = frozenset({"uml:Association", "uml:AssociationClass"})

UNTYPED = "void"
UNLIMITED = -1


def _local(el: etree._Element) -> str:
    return etree.QName(el).localname


def _children(el: etree._Element, *names: str) -> List[etree._Element]:
    return [ch for ch in el if isinstance(ch.tag, str) and _local(ch) in names]


class XmiModelReader:
    def __init__(self, root: etree._Element) -> None:
        self.root = root
        self.xml: XmlMetaModel = XmlMetaModel.from_nsmap(root.nsmap)
        self.by_id: Dict[str, etree._Element] = {}
        # classifier xmi:id -> qualified name, in document order
        self.qualified: Dict[str, QualifiedName] = {}
        self.model = Model()

    # ---------- helpers ----------
    def _id(self, el: etree._Element) -> Optional[str]:
        return el.get(self.xml.xmi_id)

    def _type(self, el: etree._Element) -> Optional[str]:
        xmi_type = el.get(self.xml.xmi_type)
        if xmi_type is None and etree.QName(el).namespace == self.xml.uml_ns:
            # Root elements carry their type in the tag (<uml:Model>)
            xmi_type = "uml:" + _local(el)
        return xmi_type

    def _refs(self, el: etree._Element, name: str) -> List[str]:
        """Idrefs given either as a space separated attribute or as child elements."""
        refs = (el.get(name) or "").split()
        for ch in _children(el, name):
            ref = ch.get(self.xml.xmi_idref)
            if ref:
                refs.append(ref)
        return refs

    def _index(self) -> None:
        for el in self.root.iter():
            if not isinstance(el.tag, str):
                continue
            xid = self._id(el)
            if xid:
                self.by_id[xid] = el

    def _walk(self, el: etree._Element, path: Tuple[str, ...]) -> None:
        for ch in el:
            if not isinstance(ch.tag, str):
                continue
            ch_type = self._type(ch)
            name = ch.get("name") or ""
            if ch_type in PACKAGE_TYPES:
                self._walk(ch, path + (name,) if name else path)
            elif ch_type in CLASSIFIER_KINDS and _local(ch) in ("packagedElement", "nestedClassifier"):
                xid = self._id(ch)
                if not xid or not name:
                    logger.warning(f"Skip classifier without id or name under '{SEPARATOR.join(path)}'")
                    continue
                self.qualified[xid] = QualifiedName(SEPARATOR.join(path + (name,)))
                self._walk(ch, path + (name,))

    def _roots(self) -> List[etree._Element]:
        if self._type(self.root) in PACKAGE_TYPES:
            return [self.root]
        return [ch for ch in self.root if isinstance(ch.tag, str) and self._type(ch) in PACKAGE_TYPES]

    # ---------- members ----------
    def _type_ref(self, el: etree._Element) -> TypeReference:
        ref = el.get("type")
        if ref:
            target = self.by_id.get(ref)
            if target is not None and target.get("name"):
                return TypeReference(TypeName(target.get("name")))
            logger.warning(f"Unresolved type reference '{ref}' on '{el.get('name')}'")
        for type_el in _children(el, "type"):
            href = type_el.get("href") or ""
            if "#" in href:
                return TypeReference(TypeName(href.rsplit("#", 1)[1]))
            target = self.by_id.get(type_el.get(self.xml.xmi_idref) or "")
            if target is not None and target.get("name"):
                return TypeReference(TypeName(target.get("name")))
        return TypeReference(TypeName(UNTYPED))

    @staticmethod
    def _visibility(el: etree._Element) -> Visibility:
        try:
            return Visibility(el.get("visibility") or "public")
        except ValueError:
            logger.warning(f"Unknown visibility '{el.get('visibility')}' on '{el.get('name')}', using private")
            return Visibility.PRIVATE

    def _field(self, el: etree._Element) -> FieldDescriptor:
        return FieldDescriptor(
            name=el.get("name") or "",
            type=self._type_ref(el),
            visibility=self._visibility(el),
            is_static=el.get("isStatic") == "true",
        )

    def _method(self, el: etree._Element) -> MethodDescriptor:
        return_type = TypeReference(TypeName(UNTYPED))
        params: List[Parameter] = []
        for i, p in enumerate(_children(el, "ownedParameter")):
            if p.get("direction") == "return":
                return_type = self._type_ref(p)
            else:
                params.append(Parameter(name=p.get("name") or f"p{i}", type=self._type_ref(p)))
        return MethodDescriptor(
            name=el.get("name") or "",
            return_type=return_type,
            parameters=tuple(params),
            visibility=self._visibility(el),
            is_static=el.get("isStatic") == "true",
            is_abstract=el.get("isAbstract") == "true",
        )

    def _classes(self) -> None:
        for xid, qname in self.qualified.items():
            el = self.by_id[xid]
            self.model.add_class(ModelClass(
                qualified_name=qname,
                kind=CLASSIFIER_KINDS[self._type(el)],
                fields=tuple(self._field(a) for a in _children(el, "ownedAttribute")),
                methods=tuple(self._method(o) for o in _children(el, "ownedOperation")),
                visibility=self._visibility(el),
            ))

    # ---------- relationships ----------
    def _class_for(self, ref: Optional[str]) -> Optional[ModelClass]:
        qname = self.qualified.get(ref or "")
        return self.model.get_class(qname) if qname else None

    def _link(self, factory, src_ref: Optional[str], dest_ref: Optional[str], what: str) -> None:
        src = self._class_for(src_ref)
        dest = self._class_for(dest_ref)
        if src is None or dest is None:
            logger.warning(f"Skip {what}: unresolved end {src_ref!r} -> {dest_ref!r}")
            return
        self.model.add_relationship(factory(src, dest))

    @staticmethod
    def _bound(el: etree._Element, tag: str, default: int) -> int:
        values = _children(el, tag)
        if not values:
            return default
        raw = values[0].get("value")
        if raw is None:
            # LiteralInteger / LiteralUnlimitedNatural default to 0
            return 0
        if raw.strip() in ("*", "-1"):
            return UNLIMITED
        try:
            return int(raw)
        except ValueError:
            logger.warning(f"Unreadable {tag} '{raw}' on '{el.get('name')}'")
            return default

    def _multiplicity(self, prop: etree._Element) -> Optional[Multiplicity]:
        lower = self._bound(prop, "lowerValue", 1)
        upper = self._bound(prop, "upperValue", 1)
        if upper == UNLIMITED or upper > 1:
            return Multiplicity.MANY
        if upper == 1:
            return Multiplicity.ONE if lower == 1 else Multiplicity.ZERO_OR_ONE
        return None

    def _endpoint(self, prop: etree._Element) -> AssociationEndpoint:
        return AssociationEndpoint(role=prop.get("name") or None, multiplicity=self._multiplicity(prop))

    def _association(self, el: etree._Element) -> None:
        end_refs = self._refs(el, "memberEnd")
        ends = [self.by_id.get(ref) for ref in end_refs]
        if len(ends) != 2 or any(end is None for end in ends):
            logger.warning(f"Skip association '{self._id(el)}': expected two resolvable member ends")
            return
        navigable_owned = set(self._refs(el, "navigableOwnedEnd"))
        navigable = [end.getparent() is not el or self._id(end) in navigable_owned for end in ends]
        if navigable == [True, False]:
            ends.reverse()
            navigable.reverse()
        src_end, dest_end = ends
        src = self._class_for(src_end.get("type"))
        dest = self._class_for(dest_end.get("type"))
        if src is None or dest is None:
            logger.warning(f"Skip association '{self._id(el)}': end type is not a diagram class")
            return
        if not any(navigable):
            # Unspecified navigability is drawn as a plain line.
            navigable = [True, True]
        self.model.add_relationship(ModelRel.association(
            src, dest,
            self._endpoint(src_end) if navigable[0] else None,
            self._endpoint(dest_end) if navigable[1] else None,
        ))

    def _relationships(self) -> None:
        for xid in self.qualified:
            el = self.by_id[xid]
            for gen in _children(el, "generalization"):
                self._link(ModelRel.generalization, xid, gen.get("general"), "generalization")
            for real in _children(el, "interfaceRealization"):
                contract = real.get("contract") or next(iter(self._refs(real, "supplier")), None)
                self._link(ModelRel.realization, xid, contract, "interface realization")
        for el in self.by_id.values():
            el_type = self._type(el)
            if el_type in DEPENDENCY_TYPES:
                for client in self._refs(el, "client"):
                    for supplier in self._refs(el, "supplier"):
                        self._link(ModelRel.dependency, client, supplier, "dependency")
            elif el_type in ASSOCIATION_TYPES:
                self._association(el)

    def read(self) -> Model:
        self._index()
        for root in self._roots():
            self._walk(root, ())
        self._classes()
        self._relationships()
        logger.debug(f"Read XMI model: {len(self.model.classes)} classes, {len(self.model.relationships)} relationships")
        return self.model


def _parser() -> etree.XMLParser:
    return etree.XMLParser(remove_blank_text=True, resolve_entities=False, no_network=True)


def parse_xmi(data: Union[str, bytes]) -> Model:
    if isinstance(data, str):
        data = data.encode("utf-8")
    try:
        root = etree.fromstring(data, _parser())
    except etree.XMLSyntaxError as e:
        raise ValueError(f"Malformed XMI document: {e}") from e
    return XmiModelReader(root).read()


def read_xmi(source: Union[str, IO[bytes]]) -> Model:
    if isinstance(source, str) and not os.path.isfile(source):
        raise FileNotFoundError(f"XMI file not found: {source}")
    try:
        tree = etree.parse(source, _parser())
    except etree.XMLSyntaxError as e:
        raise ValueError(f"Malformed XMI document: {e}") from e
    return XmiModelReader(tree.getroot()).read()


__all__ = ["XmiModelReader", "parse_xmi", "read_xmi"]

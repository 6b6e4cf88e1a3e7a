#!/usr/bin/env python3
"""
XMI reader: UML2 XMI documents to Model.
"""

import os

import pytest
from lxml import etree

from adapters.xmi import parse_xmi, read_xmi
from core.uml_model import AssociationEndpoint, TypeReference
from uml_types import ElementKind, Multiplicity, RelationshipKind, TypeName, Visibility

XMI = "http://www.omg.org/spec/XMI/20131001"
UML = "http://www.eclipse.org/uml2/5.0.0/UML"

PAPYRUS_MODEL = f"""<?xml version="1.0" encoding="UTF-8"?>
<uml:Model xmi:version="20131001" xmlns:xmi="{XMI}" xmlns:uml="{UML}" xmi:id="m" name="Shop">
  <packagedElement xmi:type="uml:Package" xmi:id="p_com" name="com">
    <packagedElement xmi:type="uml:Package" xmi:id="p_acme" name="acme">
      <packagedElement xmi:type="uml:Class" xmi:id="Order" name="Order">
        <generalization xmi:id="g1" general="Entity"/>
        <interfaceRealization xmi:id="r1" contract="Priced" client="Order" supplier="Priced"/>
        <ownedAttribute xmi:id="Order_items" name="items" visibility="private" type="LineItem" association="A1">
          <lowerValue xmi:type="uml:LiteralInteger" xmi:id="l1"/>
          <upperValue xmi:type="uml:LiteralUnlimitedNatural" xmi:id="u1" value="*"/>
        </ownedAttribute>
        <ownedAttribute xmi:id="Order_count" name="count" isStatic="true">
          <type xmi:type="uml:PrimitiveType" href="pathmap://UML_LIBRARIES/UMLPrimitiveTypes.library.uml#Integer"/>
        </ownedAttribute>
        <ownedOperation xmi:id="op1" name="total" isAbstract="true" visibility="protected">
          <ownedParameter xmi:id="op1_ret" direction="return" type="Money"/>
          <ownedParameter xmi:id="op1_p" name="currency" type="Currency"/>
        </ownedOperation>
        <ownedOperation xmi:id="op2" name="clear"/>
      </packagedElement>
      <packagedElement xmi:type="uml:Class" xmi:id="Entity" name="Entity" visibility="package"/>
      <packagedElement xmi:type="uml:Interface" xmi:id="Priced" name="Priced"/>
      <packagedElement xmi:type="uml:Enumeration" xmi:id="Currency" name="Currency">
        <ownedLiteral xmi:id="eur" name="EUR"/>
      </packagedElement>
      <packagedElement xmi:type="uml:DataType" xmi:id="Money" name="Money"/>
      <packagedElement xmi:type="uml:Class" xmi:id="LineItem" name="LineItem"/>
      <packagedElement xmi:type="uml:Association" xmi:id="A1" memberEnd="Order_items A1_order">
        <ownedEnd xmi:id="A1_order" name="order" type="Order" association="A1"/>
      </packagedElement>
      <packagedElement xmi:type="uml:Usage" xmi:id="d1" client="LineItem" supplier="Currency"/>
    </packagedElement>
  </packagedElement>
</uml:Model>
"""


def _model():
    return parse_xmi(PAPYRUS_MODEL)


def test_classifiers_are_qualified_by_package():
    model = _model()
    assert list(model.classes) == [
        "com.acme.Order", "com.acme.Entity", "com.acme.Priced", "com.acme.Currency", "com.acme.LineItem",
    ]
    assert model.get_class("com.acme.Priced").kind == ElementKind.INTERFACE
    assert model.get_class("com.acme.Currency").kind == ElementKind.ENUM
    assert model.get_class("com.acme.Entity").visibility == Visibility.PACKAGE


def test_attributes_and_operations():
    order = _model().get_class("com.acme.Order")
    items, count = order.fields
    assert items.type == TypeReference(TypeName("LineItem")) and items.visibility == Visibility.PRIVATE
    assert count.type == TypeReference(TypeName("Integer")) and count.is_static
    total, clear = order.methods
    assert total.return_type == TypeReference(TypeName("Money"))
    assert [(p.name, p.type.name) for p in total.parameters] == [("currency", "Currency")]
    assert total.is_abstract and total.visibility == Visibility.PROTECTED
    assert clear.return_type == TypeReference(TypeName("void")) and clear.parameters == ()


def test_relationships():
    rels = {(r.kind, r.source.qualified_name, r.destination.qualified_name): r for r in _model().relationships}
    assert (RelationshipKind.GENERALIZATION, "com.acme.Order", "com.acme.Entity") in rels
    assert (RelationshipKind.REALIZATION, "com.acme.Order", "com.acme.Priced") in rels
    assert (RelationshipKind.DEPENDENCY, "com.acme.LineItem", "com.acme.Currency") in rels
    assoc = rels[(RelationshipKind.ASSOCIATION, "com.acme.Order", "com.acme.LineItem")]
    # the class-owned end is the navigable destination
    assert assoc.source_endpoint is None
    assert assoc.destination_endpoint == AssociationEndpoint("items", Multiplicity.MANY)


def _assoc_doc(end1_attrs, end2_attrs, extra=""):
    return f"""<xmi:XMI xmlns:xmi="http://www.omg.org/XMI" xmlns:uml="http://www.eclipse.org/uml2/5.0.0/UML">
  <uml:Model xmi:id="m" name="M">
    <packagedElement xmi:type="uml:Class" xmi:id="A" name="A"/>
    <packagedElement xmi:type="uml:Class" xmi:id="B" name="B"/>
    <packagedElement xmi:type="uml:Association" xmi:id="AB">
      <memberEnd xmi:idref="e1"/>
      <memberEnd xmi:idref="e2"/>
      <ownedEnd xmi:id="e1" type="A" {end1_attrs}/>
      <ownedEnd xmi:id="e2" type="B" {end2_attrs}/>
      {extra}
    </packagedElement>
  </uml:Model>
</xmi:XMI>"""


def test_association_without_navigable_ends_keeps_both_endpoints():
    rel = parse_xmi(_assoc_doc('name="a"', 'name="b"')).relationships[0]
    assert rel.source.qualified_name == "A" and rel.destination.qualified_name == "B"
    assert rel.source_endpoint == AssociationEndpoint("a", Multiplicity.ONE)
    assert rel.destination_endpoint == AssociationEndpoint("b", Multiplicity.ONE)


def test_navigable_owned_end_and_bounds():
    doc = _assoc_doc(
        'name="a"',
        '',
        extra='<navigableOwnedEnd xmi:idref="e1"/>',
    )
    rel = parse_xmi(doc).relationships[0]
    # only e1 (typed A) is navigable, so A becomes the destination
    assert rel.source.qualified_name == "B" and rel.destination.qualified_name == "A"
    assert rel.source_endpoint is None
    assert rel.destination_endpoint == AssociationEndpoint("a", Multiplicity.ONE)


def test_zero_or_one_bounds():
    root = etree.fromstring(_assoc_doc('name="a"', 'name="b"').encode())
    e2 = root.xpath("//ownedEnd[@type='B']")[0]
    etree.SubElement(e2, "lowerValue", {f"{{{'http://www.omg.org/XMI'}}}type": "uml:LiteralInteger", "value": "0"})
    etree.SubElement(e2, "upperValue", {"value": "1"})
    rel = parse_xmi(etree.tostring(root)).relationships[0]
    assert rel.destination_endpoint.multiplicity == Multiplicity.ZERO_OR_ONE


def test_unresolved_references_are_skipped(caplog):
    doc = f"""<uml:Model xmlns:xmi="{XMI}" xmlns:uml="{UML}" xmi:id="m" name="M">
      <packagedElement xmi:type="uml:Class" xmi:id="A" name="A">
        <generalization xmi:id="g" general="Nowhere"/>
      </packagedElement>
    </uml:Model>"""
    model = parse_xmi(doc)
    assert model.relationships == []
    assert "Nowhere" in caplog.text


def test_read_from_file_and_errors(tmp_path):
    path = os.path.join(tmp_path, "shop.uml")
    with open(path, "w", encoding="utf-8") as f:
        f.write(PAPYRUS_MODEL)
    assert len(read_xmi(path)) == 5
    with pytest.raises(FileNotFoundError):
        read_xmi(os.path.join(tmp_path, "missing.uml"))
    with pytest.raises(ValueError):
        parse_xmi("<uml:Model")

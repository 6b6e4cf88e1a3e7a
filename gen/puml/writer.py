from typing import Optional

from app.config import DiagramConfig, DEFAULT_CONFIG
from core.uml_model import FieldDescriptor, MethodDescriptor, ModelClass
from meta import PumlMetaModel, DEFAULT_META
from uml_types import ElementKind, MemberDoc, QualifiedName, TypeRef, Visibility
from utils.printer import Printer


class PumlWriter(Printer):
    """Low-level PlantUML primitives: framing, member lines, type names and edges."""

    def __init__(self, config: Optional[DiagramConfig] = None, puml_meta: Optional[PumlMetaModel] = None) -> None:
        super().__init__()
        if config is None:
            config = DEFAULT_CONFIG.diagram
        self.config: DiagramConfig = config
        # Use provided token table or default
        if puml_meta is None:
            puml_meta = DEFAULT_META.puml
        self.tokens: PumlMetaModel = puml_meta

    def start_doc(self) -> None:
        self.println(self.tokens.start_doc)
        # Orthogonal lines
        if self.config.line_type:
            self.println(f"{self.tokens.line_type_directive} {self.config.line_type}")
        for key, value in self.config.skinparams.items():
            self.println(f"{self.tokens.skinparam_directive} {key} {value}")
        self.newline()

    def end_doc(self) -> None:
        self.newline()
        self.println(self.tokens.end_doc)

    def write_class_type(self, kind: ElementKind) -> None:
        self.print(self.tokens.get_class_keyword(kind) + " ")

    def start_class(self, model_class: ModelClass) -> None:
        self.write_class_type(model_class.kind)
        self.println(model_class.qualified_name + " {")

    def end_class(self) -> None:
        self.println("}")

    def write_hide_fields(self, qualified_name: QualifiedName) -> None:
        self.println(f"{self.tokens.hide_directive} {qualified_name} fields")

    def write_hide_methods(self, qualified_name: QualifiedName) -> None:
        self.println(f"{self.tokens.hide_directive} {qualified_name} methods")

    def write_static(self) -> None:
        self.print(self.tokens.static_prefix)

    def write_abstract(self) -> None:
        self.print(self.tokens.abstract_prefix)

    def write_visibility(self, visibility: Visibility) -> None:
        self.print(self.tokens.get_visibility_glyph(visibility))

    def write_modifiers(self, member: MemberDoc) -> None:
        """Static before abstract, both before the visibility glyph."""
        if member.is_static:
            self.write_static()
        if member.is_abstract:
            self.write_abstract()
        self.write_visibility(member.visibility)

    def write_type_name(self, type_ref: TypeRef) -> None:
        self.print(type_ref.name)
        if type_ref.arguments:
            self.print("<")
            last = len(type_ref.arguments) - 1
            for i, arg in enumerate(type_ref.arguments):
                self.write_type_name(arg)
                if i < last:
                    self.print(", ")
            self.print(">")

    def write_field(self, field: FieldDescriptor, detailed: bool) -> None:
        self.write_modifiers(field)
        if detailed:
            # Fields show the bare type name, without generic arguments.
            self.print(field.type.name + " ")
        self.print(field.name)
        self.newline()

    def write_method(self, method: MethodDescriptor, detailed: bool) -> None:
        self.write_modifiers(method)
        if detailed:
            self.write_type_name(method.return_type)
            self.print(" ")
        self.print(method.name)
        self.print("(")
        # Summary views show a bare name() whatever the parameter count.
        if detailed:
            last = len(method.parameters) - 1
            for i, param in enumerate(method.parameters):
                self.write_type_name(param.type)
                self.print(" ")
                self.print(param.name)
                if i != last:
                    self.print(", ")
        self.print(")")
        self.newline()

    def write_rel(self, src: QualifiedName, arrow: str, dest: QualifiedName) -> None:
        self.println(f"{src} {arrow} {dest}")

    @staticmethod
    def end_label(role: Optional[str], multiplicity_label: Optional[str]) -> str:
        """Quoted endpoint label with trailing space, or "" when there is nothing to show."""
        label = (role + " " if role is not None else "") + (multiplicity_label if multiplicity_label is not None else "")
        return f'"{label}" ' if label else ""

    def write_labeled_rel(self, src: QualifiedName, src_role: Optional[str], src_multiplicity: Optional[str],
                          arrow: str,
                          dest: QualifiedName, dest_role: Optional[str], dest_multiplicity: Optional[str]) -> None:
        # PlantUML does not allow a label per association end.
        # Role and multiplicity are packed into each end's multiplicity label instead.
        src_label = self.end_label(src_role, src_multiplicity)
        dest_label = self.end_label(dest_role, dest_multiplicity)
        self.println(f"{src} {src_label}{arrow} {dest_label}{dest}")


__all__ = ["PumlWriter"]

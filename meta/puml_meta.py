from dataclasses import dataclass, field
from typing import Dict

from uml_types import ElementKind, Visibility, RelationshipKind

Token = str


@dataclass
class PumlMetaModel:
    start_doc: Token = "@startuml"
    end_doc: Token = "@enduml"
    line_type_directive: Token = "skinparam linetype"
    skinparam_directive: Token = "skinparam"
    hide_directive: Token = "hide"

    static_prefix: Token = "{static} "
    abstract_prefix: Token = "{abstract} "

    class_keyword: Token = "class"
    interface_keyword: Token = "interface"
    enum_keyword: Token = "enum"

    generalization_arrow: Token = "--|>"
    realization_arrow: Token = "..|>"
    dependency_arrow: Token = "..>"
    # association arrows by endpoint presence
    navigable_arrow: Token = "-->"
    reverse_navigable_arrow: Token = "<--"
    plain_association_arrow: Token = "--"

    # Unmapped visibility falls back to the most restrictive glyph.
    default_visibility_glyph: Token = "-"
    visibility_glyphs: Dict[Visibility, Token] = field(default_factory=lambda: {
        Visibility.PUBLIC: "+",
        Visibility.PROTECTED: "#",
        Visibility.PACKAGE: "~",
        Visibility.PRIVATE: "-",
    })

    def get_class_keyword(self, kind: ElementKind) -> Token:
        mapping: Dict[ElementKind, Token] = {
            ElementKind.INTERFACE: self.interface_keyword,
            ElementKind.ENUM: self.enum_keyword,
        }
        return mapping.get(kind, self.class_keyword)

    def get_visibility_glyph(self, visibility: Visibility) -> Token:
        return self.visibility_glyphs.get(visibility, self.default_visibility_glyph)

    def get_arrow(self, kind: RelationshipKind) -> Token:
        """Arrow for the fixed (non-association) relationship kinds."""
        mapping: Dict[RelationshipKind, Token] = {
            RelationshipKind.GENERALIZATION: self.generalization_arrow,
            RelationshipKind.REALIZATION: self.realization_arrow,
            RelationshipKind.DEPENDENCY: self.dependency_arrow,
        }
        return mapping[kind]


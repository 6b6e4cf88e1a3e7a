#!/usr/bin/env python3
"""
PlantUML generator for uml2puml project.
Renders classes and relationships of the model into class diagram markup.
"""

import logging
from typing import Any, Dict, Optional

from app.config import GeneratorConfig, DEFAULT_CONFIG
from core.uml_model import AssociationEndpoint, Model, ModelClass, ModelRel
from gen.puml.writer import PumlWriter
from meta import PumlMetaModel
from uml_types import DetailMode, Multiplicity, RelationshipKind, Visibility

logger = logging.getLogger(__name__)

_MULTIPLICITY_LABELS: Dict[Any, str] = {
    Multiplicity.ONE: "1",
    Multiplicity.ZERO_OR_ONE: "0..1",
    Multiplicity.MANY: "*",
}


class DiagramGenerator(PumlWriter):
    """Base for diagram drivers.

    Subclasses decide which classes and relationships appear and in which
    order; this class only knows how to render each of them.
    """

    def __init__(self, model: Model, config: Optional[GeneratorConfig] = None,
                 puml_meta: Optional[PumlMetaModel] = None) -> None:
        if config is None:
            config = DEFAULT_CONFIG
        super().__init__(config.diagram, puml_meta)
        self.model: Model = model
        self.generator_config: GeneratorConfig = config

    def generate(self) -> str:
        raise NotImplementedError

    def write(self, out_path: str) -> None:
        text = self.generate()
        with open(out_path, "w", encoding=self.generator_config.encoding) as f:
            f.write(text)
        logger.info("Written %s", out_path)

    # ---------- Classes ----------
    def empty_class(self, model_class: ModelClass) -> None:
        self.start_class(model_class)
        self.end_class()

    def hidden_class(self, model_class: ModelClass) -> None:
        self.empty_class(model_class)
        self.newline()
        self.write_hide_fields(model_class.qualified_name)
        self.write_hide_methods(model_class.qualified_name)
        self.newline()

    def class_with_fields(self, model_class: ModelClass) -> None:
        self.detailed_class(model_class, True, False)

    def class_with_methods(self, model_class: ModelClass) -> None:
        self.detailed_class(model_class, False, True)

    def class_with_fields_and_methods(self, model_class: ModelClass) -> None:
        self.detailed_class(model_class, True, True)

    def detailed_class(self, model_class: ModelClass, show_fields: bool, show_methods: bool) -> None:
        """Class with full member signatures, members in model order."""
        self.start_class(model_class)
        if show_fields:
            for field in model_class.fields:
                self.write_field(field, True)
        if show_methods:
            for method in model_class.methods:
                self.write_method(method, True)
        self.end_class()

    def summary_class(self, model_class: ModelClass) -> None:
        """Public methods only, without signatures; fields are never shown."""
        self.start_class(model_class)
        for method in model_class.methods:
            if method.visibility == Visibility.PUBLIC:
                # Overloads are not merged, so they show up as repeated name() lines.
                self.write_method(method, False)
        self.end_class()
        self.write_hide_fields(model_class.qualified_name)

    def render_class(self, model_class: ModelClass, mode: DetailMode) -> None:
        if mode == DetailMode.EMPTY:
            self.empty_class(model_class)
        elif mode == DetailMode.HIDDEN:
            self.hidden_class(model_class)
        elif mode == DetailMode.FIELDS:
            self.class_with_fields(model_class)
        elif mode == DetailMode.METHODS:
            self.class_with_methods(model_class)
        elif mode == DetailMode.FIELDS_AND_METHODS:
            self.class_with_fields_and_methods(model_class)
        elif mode == DetailMode.SUMMARY:
            self.summary_class(model_class)
        else:
            raise ValueError(f"Unknown detail mode: {mode!r}")

    # ---------- Relationships ----------
    def relationship(self, rel: ModelRel) -> None:
        if rel.kind == RelationshipKind.GENERALIZATION:
            self.generalization(rel.source, rel.destination)
        elif rel.kind == RelationshipKind.DEPENDENCY:
            self.dependency(rel.source, rel.destination)
        elif rel.kind == RelationshipKind.REALIZATION:
            self.realization(rel.source, rel.destination)
        elif rel.kind == RelationshipKind.ASSOCIATION:
            self.association(rel.source, rel.source_endpoint, rel.destination, rel.destination_endpoint)
        else:
            logger.warning(f"Skip relationship of unknown kind {rel.kind!r}: {rel.source.qualified_name} -> {rel.destination.qualified_name}")

    def generalization(self, src: ModelClass, dest: ModelClass) -> None:
        self.write_rel(src.qualified_name, self.tokens.get_arrow(RelationshipKind.GENERALIZATION), dest.qualified_name)

    def realization(self, src: ModelClass, dest: ModelClass) -> None:
        self.write_rel(src.qualified_name, self.tokens.get_arrow(RelationshipKind.REALIZATION), dest.qualified_name)

    def dependency(self, src: ModelClass, dest: ModelClass) -> None:
        self.write_rel(src.qualified_name, self.tokens.get_arrow(RelationshipKind.DEPENDENCY), dest.qualified_name)

    def association_arrow(self, src_endpoint: Optional[AssociationEndpoint],
                          dest_endpoint: Optional[AssociationEndpoint]) -> str:
        # Depends on endpoint presence only, never on role or multiplicity.
        if src_endpoint is None:
            return self.tokens.navigable_arrow
        if dest_endpoint is None:
            return self.tokens.reverse_navigable_arrow
        return self.tokens.plain_association_arrow

    def association(self, src: ModelClass, src_endpoint: Optional[AssociationEndpoint],
                    dest: ModelClass, dest_endpoint: Optional[AssociationEndpoint]) -> None:
        self.write_labeled_rel(
            src.qualified_name,
            src_endpoint.role if src_endpoint is not None else None,
            self.multiplicity_label(src_endpoint.multiplicity) if src_endpoint is not None else None,
            self.association_arrow(src_endpoint, dest_endpoint),
            dest.qualified_name,
            dest_endpoint.role if dest_endpoint is not None else None,
            self.multiplicity_label(dest_endpoint.multiplicity) if dest_endpoint is not None else None,
        )

    @staticmethod
    def multiplicity_label(multiplicity: Optional[Multiplicity]) -> Optional[str]:
        if multiplicity is None:
            return None
        return _MULTIPLICITY_LABELS.get(multiplicity)


__all__ = ["DiagramGenerator"]

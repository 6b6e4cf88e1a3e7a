#!/usr/bin/env python3
"""
Diagram drivers: decide which classes and relationships make up a diagram.

Every driver renders a class node at most once, in model declaration order,
and only draws relationships whose two ends are nodes of the diagram.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, Iterable, List, Optional

from app.config import GeneratorConfig, DEFAULT_CONFIG
from core.uml_model import Model, ModelClass, ModelRel
from gen.puml.generator import DiagramGenerator
from uml_types import DetailMode, PackageName, QualifiedName, Visibility

logger = logging.getLogger(__name__)

DEFAULT_PACKAGE_FILE_NAME = "default"


class ScopedDiagramGenerator(DiagramGenerator):
    """Shared node bookkeeping for the concrete diagram drivers."""

    def _included(self, model_class: ModelClass) -> bool:
        if self.config.public_only and model_class.visibility != Visibility.PUBLIC:
            return False
        return True

    def _in_model_order(self, candidates: Dict[QualifiedName, ModelClass]) -> List[ModelClass]:
        # Classes only known through a relationship keep their encounter order at the end.
        ordered = [c for name, c in self.model.classes.items() if name in candidates]
        known = set(self.model.classes)
        ordered.extend(c for name, c in candidates.items() if name not in known)
        return ordered

    def _render_neighbours(self, neighbours: Iterable[ModelClass], mode: DetailMode,
                           shown: Dict[QualifiedName, ModelClass]) -> None:
        for model_class in neighbours:
            if model_class.qualified_name in shown:
                continue
            if model_class.is_internal:
                if not self._included(model_class):
                    continue
                self.render_class(model_class, mode)
            elif self.config.show_external:
                self.hidden_class(model_class)
            else:
                continue
            shown[model_class.qualified_name] = model_class

    def _render_relationships(self, rels: Iterable[ModelRel], shown: Dict[QualifiedName, ModelClass]) -> int:
        count = 0
        for rel in rels:
            if rel.source.qualified_name in shown and rel.destination.qualified_name in shown:
                self.relationship(rel)
                count += 1
        return count


class ModelDiagramGenerator(ScopedDiagramGenerator):
    """Overview of the whole model."""

    def generate(self) -> str:
        self.reset()
        self.start_doc()
        shown: Dict[QualifiedName, ModelClass] = {}
        for model_class in self.model.internal_classes:
            if self._included(model_class):
                self.render_class(model_class, self.config.overview_detail)
                shown[model_class.qualified_name] = model_class

        referenced: Dict[QualifiedName, ModelClass] = {}
        for rel in self.model.relationships:
            for end, other in ((rel.source, rel.destination), (rel.destination, rel.source)):
                if not end.is_internal and other.qualified_name in shown:
                    referenced.setdefault(end.qualified_name, end)
        self._render_neighbours(self._in_model_order(referenced), DetailMode.HIDDEN, shown)

        rel_count = self._render_relationships(self.model.relationships, shown)
        self.end_doc()
        logger.debug("Model diagram: %d classes, %d relationships", len(shown), rel_count)
        return self.getvalue()


class PackageDiagramGenerator(ScopedDiagramGenerator):
    """Classes of one package plus the outside classes they relate to, hidden."""

    def __init__(self, model: Model, package: PackageName, config: Optional[GeneratorConfig] = None, **kwargs) -> None:
        super().__init__(model, config, **kwargs)
        self.package: PackageName = package

    def generate(self) -> str:
        self.reset()
        self.start_doc()
        shown: Dict[QualifiedName, ModelClass] = {}
        for model_class in self.model.classes_in_package(self.package):
            if model_class.is_internal and self._included(model_class):
                self.render_class(model_class, self.config.package_detail)
                shown[model_class.qualified_name] = model_class
        members = set(shown)

        rels = [rel for rel in self.model.relationships
                if rel.source.qualified_name in members or rel.destination.qualified_name in members]
        outside: Dict[QualifiedName, ModelClass] = {}
        for rel in rels:
            for end in (rel.source, rel.destination):
                if end.qualified_name not in members:
                    outside.setdefault(end.qualified_name, end)
        self._render_neighbours(self._in_model_order(outside), DetailMode.HIDDEN, shown)

        rel_count = self._render_relationships(rels, shown)
        self.end_doc()
        logger.debug("Package diagram '%s': %d classes, %d relationships", self.package, len(shown), rel_count)
        return self.getvalue()


class ContextDiagramGenerator(ScopedDiagramGenerator):
    """One class in full detail surrounded by the classes it relates to."""

    def __init__(self, model: Model, qualified_name: QualifiedName, config: Optional[GeneratorConfig] = None,
                 **kwargs) -> None:
        super().__init__(model, config, **kwargs)
        focus = model.get_class(qualified_name)
        if focus is None:
            raise KeyError(qualified_name)
        self.focus: ModelClass = focus

    def generate(self) -> str:
        self.reset()
        self.start_doc()
        name = self.focus.qualified_name
        self.class_with_fields_and_methods(self.focus)
        shown: Dict[QualifiedName, ModelClass] = {name: self.focus}

        rels = self.model.relationships_of(name)
        neighbours: Dict[QualifiedName, ModelClass] = {}
        for rel in rels:
            other = rel.other_end(name)
            if other.qualified_name != name:
                neighbours.setdefault(other.qualified_name, other)
        self._render_neighbours(self._in_model_order(neighbours), self.config.context_detail, shown)

        rel_count = self._render_relationships(rels, shown)
        self.end_doc()
        logger.debug("Context diagram '%s': %d classes, %d relationships", name, len(shown), rel_count)
        return self.getvalue()


def package_file_name(package: PackageName, extension: str) -> str:
    return (str(package) or DEFAULT_PACKAGE_FILE_NAME) + extension


def generate_package_diagrams(model: Model, config: Optional[GeneratorConfig] = None) -> Dict[PackageName, str]:
    """Render one diagram per package holding internal classes."""
    return {package: PackageDiagramGenerator(model, package, config).generate()
            for package in model.packages()}


def write_package_diagrams(model: Model, directory: Optional[str] = None,
                           config: Optional[GeneratorConfig] = None) -> List[str]:
    if config is None:
        config = DEFAULT_CONFIG
    if directory is None:
        directory = config.output_directory
    os.makedirs(directory, exist_ok=True)
    written: List[str] = []
    for package, text in generate_package_diagrams(model, config).items():
        out_path = os.path.join(directory, package_file_name(package, config.file_extension))
        with open(out_path, "w", encoding=config.encoding) as f:
            f.write(text)
        written.append(out_path)
    logger.info("Written %d package diagrams to %s", len(written), directory)
    return written


__all__ = [
    "ModelDiagramGenerator",
    "PackageDiagramGenerator",
    "ContextDiagramGenerator",
    "generate_package_diagrams",
    "write_package_diagrams",
    "package_file_name",
]

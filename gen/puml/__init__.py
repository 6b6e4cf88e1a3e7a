from .writer import PumlWriter
from .generator import DiagramGenerator
from .diagrams import (
    ModelDiagramGenerator, PackageDiagramGenerator, ContextDiagramGenerator,
    generate_package_diagrams, write_package_diagrams
)

__all__ = [
    "PumlWriter",
    "DiagramGenerator",
    "ModelDiagramGenerator",
    "PackageDiagramGenerator",
    "ContextDiagramGenerator",
    "generate_package_diagrams",
    "write_package_diagrams",
]

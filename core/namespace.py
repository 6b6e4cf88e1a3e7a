from typing import TYPE_CHECKING, Dict, Iterable, List

from uml_types import PackageName, QualifiedName

if TYPE_CHECKING:
    from .uml_model import ModelClass

SEPARATOR = "."


def package_of(qualified_name: QualifiedName) -> PackageName:
    """Return the package part of a qualified name ("" for the root package)."""
    name = str(qualified_name)
    if SEPARATOR not in name:
        return PackageName("")
    return PackageName(name.rsplit(SEPARATOR, 1)[0])


def simple_name(qualified_name: QualifiedName) -> str:
    return str(qualified_name).rsplit(SEPARATOR, 1)[-1]


def group_by_package(classes: Iterable["ModelClass"]) -> Dict[PackageName, List["ModelClass"]]:
    """Group classes by package, keeping first-seen package order and class order."""
    groups: Dict[PackageName, List[ModelClass]] = {}
    for model_class in classes:
        groups.setdefault(package_of(model_class.qualified_name), []).append(model_class)
    return groups


__all__ = ["SEPARATOR", "package_of", "simple_name", "group_by_package"]

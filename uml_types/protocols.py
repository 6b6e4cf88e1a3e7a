#!/usr/bin/env python3
"""
Protocols for uml2puml project.

Renderers depend on these narrow surfaces only, never on a full
documentation model.
"""

from typing import Protocol, Sequence

from .uml import Visibility


class TypeRef(Protocol):
    """A type name with (possibly nested) generic type arguments."""
    @property
    def name(self) -> str: ...
    @property
    def arguments(self) -> Sequence['TypeRef']: ...


class MemberDoc(Protocol):
    """The member flags a renderer is allowed to read."""
    @property
    def name(self) -> str: ...
    @property
    def visibility(self) -> Visibility: ...
    @property
    def is_static(self) -> bool: ...
    @property
    def is_abstract(self) -> bool: ...

#!/usr/bin/env python3
"""
Raw (decoded but not yet validated) model description data.
"""

from typing import Any, Dict, List, Optional

RawEndpointData = Optional[Dict[str, Any]]
RawParameterData = Dict[str, Any]
RawFieldData = Dict[str, Any]
RawMethodData = Dict[str, Any]
RawClassData = Dict[str, Any]
RawRelationshipData = Dict[str, Any]
RawModelData = Dict[str, List[Dict[str, Any]]]

from .xml_meta import XmlMetaModel
from .puml_meta import PumlMetaModel
from .default_model import DEFAULT_META, MetaBundle

__all__ = [
    "XmlMetaModel",
    "PumlMetaModel",
    "MetaBundle",
    "DEFAULT_META",
]

from dataclasses import dataclass
from .xml_meta import XmlMetaModel
from .puml_meta import PumlMetaModel


@dataclass
class MetaBundle:
    xml: XmlMetaModel
    puml: PumlMetaModel


DEFAULT_META = MetaBundle(xml=XmlMetaModel(), puml=PumlMetaModel())

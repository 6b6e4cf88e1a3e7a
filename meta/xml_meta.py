from dataclasses import dataclass
from typing import Mapping, Optional

Namespace = str
AttributeName = str

XMI_NAMESPACES = (
    "http://www.omg.org/XMI",
    "http://www.omg.org/spec/XMI/20131001",
    "http://schema.omg.org/spec/XMI/2.1",
)


@dataclass
class XmlMetaModel:
    xmi_ns: Namespace = "http://www.omg.org/XMI"
    uml_ns: Namespace = "http://www.eclipse.org/uml2/5.0.0/UML"

    @classmethod
    def from_nsmap(cls, nsmap: Mapping[Optional[str], str]) -> "XmlMetaModel":
        """Pick the XMI/UML namespaces declared on a document root."""
        meta = cls()
        for prefix, uri in nsmap.items():
            if uri in XMI_NAMESPACES or prefix == "xmi":
                meta.xmi_ns = uri
            elif prefix == "uml" or uri.rstrip("/").endswith("/UML") or "/spec/UML/" in uri:
                meta.uml_ns = uri
        return meta

    @property
    def xmi_id(self) -> AttributeName:
        return f"{{{self.xmi_ns}}}id"

    @property
    def xmi_idref(self) -> AttributeName:
        return f"{{{self.xmi_ns}}}idref"

    @property
    def xmi_type(self) -> AttributeName:
        return f"{{{self.xmi_ns}}}type"


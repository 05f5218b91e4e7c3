from typing import Any, Dict
from storefront.domain.document import Document, SectionRecord
from storefront.domain.sections import SECTION_TYPES


def normalize_section(section: SectionRecord) -> Dict[str, Any]:
    data = section.to_dict()
    data["label"] = SECTION_TYPES.get(section.type, section.type)
    return data


def normalize_document(document: Document) -> Dict[str, Any]:
    return {
        "sections": [normalize_section(s) for s in document.sections],
        "theme": document.theme.to_dict(),
    }


def normalize_session(session) -> Dict[str, Any]:
    data = session.to_dict()
    data["document"] = normalize_document(session.document)
    return data

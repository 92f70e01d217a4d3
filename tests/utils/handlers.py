from typing import Dict, List

from contenthandler.models.content import Content
from contenthandler.models.encounter.dto import Encounter
from contenthandler.services.handlers.content_handler import ContentHandler


class StructuredDocumentHandler(ContentHandler):
    """
    Stand-in for a caller defined handler. Only `clone_handler` is exercised by the
    registry, storing content is not supported.
    """

    def __init__(self, name: str) -> None:
        self.name = name

    def save_content(
        self,
        patient: str,
        providers_by_role: Dict[str, List[str]],
        encounter_type: str,
        content: Content,
    ) -> Encounter:
        raise NotImplementedError

    def fetch_content(self, content_id: str) -> Content | None:
        return None

    def clone_handler(self) -> "StructuredDocumentHandler":
        return StructuredDocumentHandler(self.name)


class OtherDocumentHandler(StructuredDocumentHandler):
    def clone_handler(self) -> "OtherDocumentHandler":
        return OtherDocumentHandler(self.name)

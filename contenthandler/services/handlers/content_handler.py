from abc import ABC
import abc
from typing import Dict, List

from contenthandler.models.content import Content
from contenthandler.models.encounter.dto import Encounter
from contenthandler.models.handler_binding import HandlerBinding


class ContentHandler(ABC):
    """
    Capability every content handler provides to the registry and its callers.

    Handlers are registered as prototypes: the registry never calls a stored handler
    directly but hands out the result of `clone_handler`, so two callers never share
    a handler instance.
    Methods:
        save_content(patient, providers_by_role, encounter_type, content) -> Encounter:
            Store the content for the patient and return the saved encounter.
        fetch_content(content_id) -> Content | None:
            Return previously stored content, or None when it cannot be found.
        clone_handler() -> ContentHandler:
            Return a new handler with the same configuration.
    """

    @abc.abstractmethod
    def save_content(
        self,
        patient: str,
        providers_by_role: Dict[str, List[str]],
        encounter_type: str,
        content: Content,
    ) -> Encounter:
        """
        Persists the content and returns the encounter it was stored in.
        Raises StoreFailureException if the host store rejects it.
        """
        pass

    @abc.abstractmethod
    def fetch_content(self, content_id: str) -> Content | None:
        """
        Returns the content stored under the accession identifier, or None if it is not
        found or cannot be read.
        """
        pass

    @abc.abstractmethod
    def clone_handler(self) -> "ContentHandler":
        pass

    def for_binding(self, binding: HandlerBinding) -> "ContentHandler":
        """
        Returns a clone bound to another content type or type/format code pair. Handlers
        that are not bound to a key ignore the binding.
        """
        return self.clone_handler()

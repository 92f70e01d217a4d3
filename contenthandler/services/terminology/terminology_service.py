from abc import ABC
import abc

from contenthandler.models.encounter.dto import Concept, ConceptDraft


class TerminologyService(ABC):
    """
    The host's concept dictionary.
    """

    @abc.abstractmethod
    def get_concept(self, concept_id: int) -> Concept | None:
        pass

    @abc.abstractmethod
    def get_concept_by_name(self, name: str) -> Concept | None:
        pass

    @abc.abstractmethod
    def save_concept_if_absent(self, draft: ConceptDraft) -> Concept:
        """
        Atomically creates the concept unless one with the same name exists, and returns
        whichever concept is stored under that name afterwards. Concurrent callers for the
        same name all receive the same concept.
        """
        pass

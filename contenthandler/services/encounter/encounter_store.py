from abc import ABC
import abc
from datetime import datetime
from typing import List

from contenthandler.models.encounter.dto import ComplexObservation, Encounter, EncounterDraft


class EncounterStore(ABC):
    """
    The host's clinical data store. Encounters, observations and the way complex
    values are persisted are owned by the host; handlers only go through this
    interface.
    """

    @abc.abstractmethod
    def save(self, draft: EncounterDraft) -> Encounter:
        """
        Persists the encounter with its observations and returns the stored encounter.
        """
        pass

    @abc.abstractmethod
    def find(
        self,
        patient: str,
        encounter_types: List[str] | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> List[Encounter]:
        """
        Returns the patient's encounters, optionally restricted to encounter types and an
        inclusive date window. Missing bounds are open.
        """
        pass

    @abc.abstractmethod
    def find_observations_by_accession_number(
        self, accession_number: str
    ) -> List[ComplexObservation]:
        pass

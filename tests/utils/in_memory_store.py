import threading
from datetime import datetime
from typing import Dict, List

from contenthandler.models.encounter.dto import (
    ComplexObservation,
    Concept,
    ConceptDraft,
    Encounter,
    EncounterDraft,
)
from contenthandler.services.encounter.encounter_store import EncounterStore
from contenthandler.services.terminology.terminology_service import TerminologyService


class InMemoryTerminologyService(TerminologyService):
    """
    Thread safe concept dictionary for tests. `save_concept_if_absent` is atomic, the
    number of concepts actually created is kept in `created`.
    """

    def __init__(self) -> None:
        self.__lock = threading.Lock()
        self.__concepts: Dict[int, Concept] = {}
        self.__next_id = 1
        self.created = 0

    def get_concept(self, concept_id: int) -> Concept | None:
        with self.__lock:
            return self.__concepts.get(concept_id)

    def get_concept_by_name(self, name: str) -> Concept | None:
        with self.__lock:
            return self.__find_by_name(name)

    def save_concept_if_absent(self, draft: ConceptDraft) -> Concept:
        with self.__lock:
            existing = self.__find_by_name(draft.name)
            if existing is not None:
                return existing

            concept = Concept(concept_id=self.__next_id, **draft.model_dump())
            self.__next_id += 1
            self.__concepts[concept.concept_id] = concept
            self.created += 1
            return concept

    def remove_concept(self, concept_id: int) -> None:
        with self.__lock:
            self.__concepts.pop(concept_id, None)

    def __find_by_name(self, name: str) -> Concept | None:
        for concept in self.__concepts.values():
            if concept.name == name:
                return concept
        return None


class InMemoryEncounterStore(EncounterStore):
    def __init__(self, terminology_service: InMemoryTerminologyService) -> None:
        self.__terminology_service = terminology_service
        self.__lock = threading.Lock()
        self.__encounters: List[Encounter] = []
        self.__next_obs_id = 1

    def save(self, draft: EncounterDraft) -> Encounter:
        with self.__lock:
            observations = []
            for obs in draft.observations:
                concept = self.__terminology_service.get_concept(obs.concept_id)
                if concept is None:
                    raise ValueError(f"Unknown concept {obs.concept_id}")
                observations.append(
                    ComplexObservation(
                        obs_id=self.__next_obs_id,
                        concept_name=concept.name,
                        concept_id=obs.concept_id,
                        obs_datetime=obs.obs_datetime,
                        accession_number=obs.accession_number,
                        complex_data=obs.complex_data,
                    )
                )
                self.__next_obs_id += 1

            encounter = Encounter(
                encounter_id=len(self.__encounters) + 1,
                patient=draft.patient,
                encounter_type=draft.encounter_type,
                encounter_datetime=draft.encounter_datetime,
                providers_by_role=draft.providers_by_role,
                observations=observations,
            )
            self.__encounters.append(encounter)
            return encounter

    def add(self, encounter: Encounter) -> None:
        with self.__lock:
            self.__encounters.append(encounter)

    def find(
        self,
        patient: str,
        encounter_types: List[str] | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> List[Encounter]:
        with self.__lock:
            return [
                e
                for e in self.__encounters
                if e.patient == patient
                and (encounter_types is None or e.encounter_type in encounter_types)
                and (date_from is None or e.encounter_datetime >= date_from)
                and (date_to is None or e.encounter_datetime <= date_to)
            ]

    def find_observations_by_accession_number(
        self, accession_number: str
    ) -> List[ComplexObservation]:
        with self.__lock:
            return [
                obs
                for e in self.__encounters
                for obs in e.observations
                if obs.accession_number == accession_number
            ]

from datetime import datetime
from typing import Any, Dict, List

from pydantic import BaseModel, Field


class ComplexData(BaseModel):
    """Title and value of a complex observation as kept by the host store"""

    title: str | None = None
    data: Any = None


class ComplexObservationDraft(BaseModel):
    concept_id: int
    obs_datetime: datetime
    accession_number: str
    complex_data: ComplexData


class ComplexObservation(ComplexObservationDraft):
    obs_id: int
    concept_name: str


class EncounterDraft(BaseModel):
    patient: str
    encounter_type: str
    encounter_datetime: datetime
    providers_by_role: Dict[str, List[str]] = Field(default_factory=dict)
    observations: List[ComplexObservationDraft] = Field(default_factory=list)


class Encounter(BaseModel):
    encounter_id: int
    patient: str
    encounter_type: str
    encounter_datetime: datetime
    providers_by_role: Dict[str, List[str]] = Field(default_factory=dict)
    observations: List[ComplexObservation] = Field(default_factory=list)


class ConceptDraft(BaseModel):
    name: str
    description: str
    datatype: str = "Complex"
    concept_class: str = "Misc"
    handler: str | None = None
    locale: str = "en"


class Concept(ConceptDraft):
    concept_id: int

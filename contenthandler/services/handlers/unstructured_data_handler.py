import logging
from datetime import datetime
from typing import Any, Dict, List

from pydantic import ValidationError

from contenthandler.exceptions import ContentHandlerException, StoreFailureException
from contenthandler.models.content import Content
from contenthandler.models.encounter.dto import (
    ComplexData,
    ComplexObservation,
    ComplexObservationDraft,
    Encounter,
    EncounterDraft,
)
from contenthandler.models.handler_binding import HandlerBinding
from contenthandler.services.encounter.encounter_store import EncounterStore
from contenthandler.services.handlers.content_handler import ContentHandler
from contenthandler.services.payload.payload_resolver import PayloadResolver
from contenthandler.services.terminology.concept_resolver import (
    UnstructuredAttachmentConceptResolver,
)

logger = logging.getLogger(__name__)


class UnstructuredDataHandler(ContentHandler):
    """
    Fallback handler for content nobody registered a handler for.

    The content is stored as-is: a new encounter holding a single complex observation
    whose value is the Content object. The observation is tagged with an "unstructured
    attachment" concept for the content's format and carries the content id as its
    accession number, which is how the content is found again.

    A handler may be bound to a content type or to a type/format code pair. The binding
    titles the stored value and limits `query_encounters` to matching content.
    """

    def __init__(
        self,
        encounter_store: EncounterStore,
        concept_resolver: UnstructuredAttachmentConceptResolver,
        payload_resolver: PayloadResolver,
        binding: HandlerBinding | None = None,
    ) -> None:
        self.__encounter_store = encounter_store
        self.__concept_resolver = concept_resolver
        self.__payload_resolver = payload_resolver
        self.binding = binding if binding is not None else HandlerBinding()

    def save_content(
        self,
        patient: str,
        providers_by_role: Dict[str, List[str]],
        encounter_type: str,
        content: Content,
    ) -> Encounter:
        now = datetime.now()
        code = content.format_code if content.format_code is not None else content.type_code

        try:
            concept = self.__concept_resolver.resolve(code)
            draft = EncounterDraft(
                patient=patient,
                encounter_type=encounter_type,
                encounter_datetime=now,
                providers_by_role={
                    role: list(providers) for role, providers in providers_by_role.items()
                },
                observations=[
                    ComplexObservationDraft(
                        concept_id=concept.concept_id,
                        obs_datetime=now,
                        accession_number=content.content_id,
                        complex_data=ComplexData(
                            title=self.binding.title() or content.content_type,
                            data=content,
                        ),
                    )
                ],
            )
            encounter = self.__encounter_store.save(draft)
        except StoreFailureException:
            raise
        except Exception as e:
            logger.error(f"Failed to save content {content.content_id} for patient {patient}: {e}")
            raise StoreFailureException(f"Failed to save content {content.content_id}") from e

        logger.info(
            f"Saved content {content.content_id} in encounter {encounter.encounter_id} for patient {patient}"
        )
        return encounter

    def fetch_content(self, content_id: str) -> Content | None:
        try:
            observations = self.__encounter_store.find_observations_by_accession_number(content_id)
        except Exception as e:
            logger.error(f"Failed to look up content {content_id}: {e}")
            return None

        for obs in observations:
            if obs.accession_number != content_id or not self.__is_unstructured(obs):
                continue

            content = self.__decode(obs)
            if content is not None:
                return content

        return None

    def query_encounters(
        self,
        patient: str,
        encounter_types: List[str] | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> List[Content]:
        """
        Returns the content stored for the patient within the date window that matches
        this handler's binding.
        """
        encounters = self.__encounter_store.find(
            patient,
            encounter_types=encounter_types,
            date_from=date_from,
            date_to=date_to,
        )

        results: List[Content] = []
        for encounter in encounters:
            for obs in encounter.observations:
                if not self.__is_unstructured(obs):
                    continue
                content = self.__decode(obs)
                if content is not None and self.binding.matches(content):
                    results.append(content)

        return results

    def get_raw_data(self, content: Content) -> bytes:
        return self.__payload_resolver.resolve(content)

    def clone_handler(self) -> "UnstructuredDataHandler":
        return self.for_binding(self.binding)

    def for_binding(self, binding: HandlerBinding) -> "UnstructuredDataHandler":
        return UnstructuredDataHandler(
            encounter_store=self.__encounter_store,
            concept_resolver=self.__concept_resolver,
            payload_resolver=self.__payload_resolver,
            binding=binding,
        )

    def __is_unstructured(self, obs: ComplexObservation) -> bool:
        return self.__concept_resolver.is_unstructured_attachment(obs.concept_name)

    def __decode(self, obs: ComplexObservation) -> Content | None:
        content = _to_content(obs.complex_data.data)
        if content is None:
            logger.warning(
                f"Unprocessable content found in unstructured data obs (obs_id={obs.obs_id})"
            )
        return content


def _to_content(data: Any) -> Content | None:
    if isinstance(data, Content):
        return data

    try:
        if isinstance(data, (str, bytes)):
            return Content.model_validate_json(data)
        if isinstance(data, dict):
            return Content.model_validate(data)
    except (ValidationError, ContentHandlerException):
        return None

    return None

import logging

from contenthandler.models.coded_value import CodedValue
from contenthandler.models.encounter.dto import Concept, ConceptDraft
from contenthandler.services.terminology.cache.concept_name_cache import ConceptNameCache
from contenthandler.services.terminology.terminology_service import TerminologyService

logger = logging.getLogger(__name__)

DEFAULT_CONCEPT_BASE_NAME = "Unstructured Attachment"
CONCEPT_DESCRIPTION = "Represents a generic unstructured data attachment"


class UnstructuredAttachmentConceptResolver:
    """
    Finds, or creates, the complex concept that tags unstructured attachments of a
    given format, e.g. "Unstructured Attachment (LOINC-34133-9)".

    When a concept name cache is given, concept ids are looked up by name in the cache
    before asking the terminology service.
    """

    def __init__(
        self,
        terminology_service: TerminologyService,
        complex_obs_handler: str,
        concept_base_name: str = DEFAULT_CONCEPT_BASE_NAME,
        cache: ConceptNameCache | None = None,
    ) -> None:
        self.__terminology_service = terminology_service
        self.__complex_obs_handler = complex_obs_handler
        self.__cache = cache
        self.concept_base_name = concept_base_name

    def concept_name(self, code: CodedValue | None) -> str:
        if code is None:
            return self.concept_base_name
        return f"{self.concept_base_name} ({code.coding_scheme}-{code.code})"

    def is_unstructured_attachment(self, concept_name: str) -> bool:
        return concept_name.startswith(self.concept_base_name)

    def resolve(self, code: CodedValue | None) -> Concept:
        name = self.concept_name(code)

        if self.__cache is None:
            return self.__get_or_create(name)

        concept_id = self.__cache.get_or_create(
            name, lambda: self.__get_or_create(name).concept_id
        )
        concept = self.__terminology_service.get_concept(concept_id)
        if concept is not None:
            return concept

        # The cached id no longer exists in the dictionary
        logger.warning(f"Cached concept {concept_id} for '{name}' not found, resolving by name")
        return self.__get_or_create(name)

    def __get_or_create(self, name: str) -> Concept:
        concept = self.__terminology_service.get_concept_by_name(name)
        if concept is not None:
            return concept

        logger.info(f"Creating concept '{name}'")
        return self.__terminology_service.save_concept_if_absent(
            ConceptDraft(
                name=name,
                description=CONCEPT_DESCRIPTION,
                handler=self.__complex_obs_handler,
            )
        )

from collections.abc import Generator
from typing import Any, Dict, List

import inject
import pytest

from contenthandler.config import reset_config, set_config
from contenthandler.models.coded_value import CodedValue
from contenthandler.models.content import Content
from contenthandler.models.handler_binding import HandlerBinding
from contenthandler.services.handlers.unstructured_data_handler import UnstructuredDataHandler
from contenthandler.services.payload.payload_fetcher import PayloadFetcher
from contenthandler.services.payload.payload_resolver import PayloadResolver
from contenthandler.services.registry.content_handler_service import ContentHandlerService
from contenthandler.services.terminology.concept_resolver import (
    UnstructuredAttachmentConceptResolver,
)
from contenthandler.stats import reset_stats
from tests.test_config import get_test_config
from tests.utils.in_memory_store import InMemoryEncounterStore, InMemoryTerminologyService


@pytest.fixture(autouse=True)
def test_config() -> Generator[None, Any, None]:
    set_config(get_test_config())
    yield
    reset_config()
    reset_stats()
    inject.clear()


@pytest.fixture()
def type_code() -> CodedValue:
    return CodedValue(code="34133-9", coding_scheme="LOINC", coding_scheme_name="LOINC")


@pytest.fixture()
def format_code() -> CodedValue:
    return CodedValue(
        code="urn:ihe:pcc:xphr:2007", coding_scheme="IHE", coding_scheme_name="formatCode"
    )


@pytest.fixture()
def text_content(type_code: CodedValue, format_code: CodedValue) -> Content:
    return Content.from_text(
        "<ClinicalDocument/>", type_code, format_code, "text/xml"
    )


@pytest.fixture()
def providers_by_role() -> Dict[str, List[str]]:
    return {"author": ["provider-1", "provider-2"]}


@pytest.fixture()
def terminology_service() -> InMemoryTerminologyService:
    return InMemoryTerminologyService()


@pytest.fixture()
def encounter_store(terminology_service: InMemoryTerminologyService) -> InMemoryEncounterStore:
    return InMemoryEncounterStore(terminology_service)


@pytest.fixture()
def payload_fetcher() -> PayloadFetcher:
    return PayloadFetcher(timeout=1)


@pytest.fixture()
def payload_resolver(payload_fetcher: PayloadFetcher) -> PayloadResolver:
    return PayloadResolver(fetcher=payload_fetcher)


@pytest.fixture()
def concept_resolver(
    terminology_service: InMemoryTerminologyService,
) -> UnstructuredAttachmentConceptResolver:
    return UnstructuredAttachmentConceptResolver(
        terminology_service=terminology_service,
        complex_obs_handler="ContentObsHandler",
    )


@pytest.fixture()
def default_handler(
    encounter_store: InMemoryEncounterStore,
    concept_resolver: UnstructuredAttachmentConceptResolver,
    payload_resolver: PayloadResolver,
) -> UnstructuredDataHandler:
    return UnstructuredDataHandler(
        encounter_store=encounter_store,
        concept_resolver=concept_resolver,
        payload_resolver=payload_resolver,
        binding=HandlerBinding(),
    )


@pytest.fixture()
def content_handler_service(default_handler: UnstructuredDataHandler) -> ContentHandlerService:
    return ContentHandlerService(default_handler=default_handler)

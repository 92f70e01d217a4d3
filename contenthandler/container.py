import functools

import inject

from contenthandler.config import get_config
from contenthandler.models.handler_binding import HandlerBinding
from contenthandler.services.api.authenticators.factory import AuthenticatorFactory
from contenthandler.services.encounter.encounter_store import EncounterStore
from contenthandler.services.handlers.unstructured_data_handler import UnstructuredDataHandler
from contenthandler.services.payload.payload_fetcher import PayloadFetcher
from contenthandler.services.payload.payload_resolver import PayloadResolver
from contenthandler.services.registry.content_handler_service import ContentHandlerService
from contenthandler.services.terminology.cache.concept_name_cache import ConceptNameCache
from contenthandler.services.terminology.cache.provider import ConceptCacheProvider
from contenthandler.services.terminology.concept_resolver import (
    UnstructuredAttachmentConceptResolver,
)
from contenthandler.services.terminology.terminology_service import TerminologyService


def container_config(
    binder: inject.Binder,
    encounter_store: EncounterStore,
    terminology_service: TerminologyService,
) -> None:
    config = get_config()

    binder.bind(EncounterStore, encounter_store)
    binder.bind(TerminologyService, terminology_service)

    auth_factory = AuthenticatorFactory(config=config)
    auth = auth_factory.create_authenticator()

    payload_fetcher = PayloadFetcher(
        timeout=config.payload.timeout,
        auth=auth,
        mtls_cert=config.payload.mtls_client_cert_path,
        mtls_key=config.payload.mtls_client_key_path,
        verify_ca=config.payload.verify_ca,
    )
    payload_resolver = PayloadResolver(fetcher=payload_fetcher)
    binder.bind(PayloadResolver, payload_resolver)

    concept_cache: ConceptNameCache | None = None
    if config.unstructured.cache_concepts_by_name:
        concept_cache = ConceptCacheProvider(config=config.concept_cache).create()
        binder.bind(ConceptNameCache, concept_cache)

    concept_resolver = UnstructuredAttachmentConceptResolver(
        terminology_service=terminology_service,
        complex_obs_handler=config.unstructured.complex_obs_handler,
        concept_base_name=config.unstructured.concept_base_name,
        cache=concept_cache,
    )
    binder.bind(UnstructuredAttachmentConceptResolver, concept_resolver)

    default_handler = UnstructuredDataHandler(
        encounter_store=encounter_store,
        concept_resolver=concept_resolver,
        payload_resolver=payload_resolver,
        binding=HandlerBinding(),
    )

    content_handler_service = ContentHandlerService(
        default_handler=default_handler,
        fallback_to_default=config.registry.fallback_to_default,
    )
    binder.bind(ContentHandlerService, content_handler_service)


def get_content_handler_service() -> ContentHandlerService:
    return inject.instance(ContentHandlerService)


def get_payload_resolver() -> PayloadResolver:
    return inject.instance(PayloadResolver)


def get_concept_resolver() -> UnstructuredAttachmentConceptResolver:
    return inject.instance(UnstructuredAttachmentConceptResolver)


def get_concept_name_cache() -> ConceptNameCache | None:
    if not get_config().unstructured.cache_concepts_by_name:
        return None
    return inject.instance(ConceptNameCache)  # type: ignore


def get_encounter_store() -> EncounterStore:
    return inject.instance(EncounterStore)  # type: ignore


def get_terminology_service() -> TerminologyService:
    return inject.instance(TerminologyService)  # type: ignore


def setup_container(
    encounter_store: EncounterStore, terminology_service: TerminologyService
) -> None:
    inject.configure(
        functools.partial(
            container_config,
            encounter_store=encounter_store,
            terminology_service=terminology_service,
        ),
        once=True,
    )

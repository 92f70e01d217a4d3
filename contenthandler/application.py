import logging

from contenthandler.config import get_config
from contenthandler.container import get_content_handler_service, setup_container
from contenthandler.services.encounter.encounter_store import EncounterStore
from contenthandler.services.registry.content_handler_service import ContentHandlerService
from contenthandler.services.terminology.terminology_service import TerminologyService
from contenthandler.stats import setup_stats


def application_init(
    encounter_store: EncounterStore, terminology_service: TerminologyService
) -> ContentHandlerService:
    """
    Bootstraps the content handler module inside a host application. The host supplies
    its encounter store and terminology service, the rest is built from configuration.
    """
    setup_logging()
    if get_config().stats.enabled:
        setup_stats()
    setup_container(encounter_store, terminology_service)
    return get_content_handler_service()


def setup_logging() -> None:
    loglevel = logging.getLevelName(get_config().app.loglevel.upper())

    if isinstance(loglevel, str):
        raise ValueError(f"Invalid loglevel {loglevel.upper()}")
    logging.basicConfig(
        level=loglevel,
        datefmt="%m/%d/%Y %I:%M:%S %p",
    )

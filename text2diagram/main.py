"""
Application entry point.

Configures logging from settings once and builds the shared
DiagramService. Hosts (a web app, a worker, a script) call create_service
at startup and reuse the returned service across requests.

Dependencies: text2diagram.application, text2diagram.configs, text2diagram.observability
System role: Application initialization and configuration
"""

import logging

from text2diagram.application.diagram_service import DiagramService
from text2diagram.boundary.llm.client import LLMClient
from text2diagram.configs.settings import Settings, get_settings
from text2diagram.observability.logger import configure_logging

logger = logging.getLogger(__name__)


def create_service(
    settings: Settings | None = None,
    llm: LLMClient | None = None,
) -> DiagramService:
    """
    Configure logging and build the diagram service.

    Args:
        settings: Application settings (cached singleton when omitted)
        llm: LLM boundary client (built from settings when omitted)

    Returns:
        DiagramService: Service ready to handle requests
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    logger.info(
        f"{__name__}:create_service - Application startup: environment={settings.environment}, "
        f"log_level={settings.log_level}, model={settings.llm.model_id}"
    )
    return DiagramService(llm=llm, settings=settings)

"""Tests for the application entry point."""

from unittest.mock import patch

from text2diagram.application.diagram_service import DiagramService
from text2diagram.configs.llm import LLMSettings
from text2diagram.configs.pipeline import PipelineSettings
from text2diagram.configs.settings import Settings
from text2diagram.main import create_service


class TestCreateService:
    """Startup wiring from settings."""

    def test_configures_logging_and_reports_environment(self, scripted_llm) -> None:
        """log_level drives configure_logging and the startup line names the environment."""
        # Arrange
        settings = Settings(
            environment="staging",
            log_level="warning",
            llm=LLMSettings(),
            pipeline=PipelineSettings(),
        )

        # Act
        with patch("text2diagram.main.configure_logging") as configure, \
                patch("text2diagram.main.logger") as logger:
            service = create_service(settings=settings, llm=scripted_llm([]))

        # Assert
        configure.assert_called_once_with("WARNING")
        startup_message = logger.info.call_args.args[0]
        assert "environment=staging" in startup_message
        assert "log_level=WARNING" in startup_message
        assert isinstance(service, DiagramService)

    def test_falls_back_to_cached_settings(self, scripted_llm) -> None:
        settings = Settings(llm=LLMSettings(), pipeline=PipelineSettings())

        with patch("text2diagram.main.get_settings", return_value=settings) as cached, \
                patch("text2diagram.main.configure_logging") as configure:
            create_service(llm=scripted_llm([]))

        cached.assert_called_once_with()
        configure.assert_called_once_with(settings.log_level)

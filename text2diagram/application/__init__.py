"""Application layer: diagram generators and the diagram service."""

from text2diagram.application.diagram_service import DiagramService

__all__ = ["DiagramService"]

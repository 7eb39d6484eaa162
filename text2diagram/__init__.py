"""
text2diagram package.

Turns natural-language use-case descriptions into diagram markup
(Mermaid / PlantUML) by orchestrating validated LLM calls.
"""

__version__ = "0.1.0"

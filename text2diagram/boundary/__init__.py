"""
Boundary layer.

Adapters for external collaborators; currently the LLM provider.
"""

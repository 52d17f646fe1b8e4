"""FluxFlow - agency CRM core.

Session resolution, role-based route access, navigation and the
Kanban task board, exposed over a FastAPI HTTP API.
"""

__version__ = "0.1.0"

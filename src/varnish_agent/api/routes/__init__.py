"""API route modules.

Route organization:
- directors: Director registry CRUD (authenticated)
- config: Rendered VCL and engine config snapshot (authenticated)
- health: Liveness probe
- static: Admin UI assets
"""

from . import config, directors, health, static

__all__ = [
    "config",
    "directors",
    "health",
    "static",
]

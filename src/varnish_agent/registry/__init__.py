"""Director registry: model and CRUD gateway over the engine."""

from varnish_agent.registry.gateway import RegistryGateway
from varnish_agent.registry.models import Director, sort_directors

__all__ = [
    "Director",
    "RegistryGateway",
    "sort_directors",
]

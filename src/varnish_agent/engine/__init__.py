"""Configuration engine adapters.

The engine owns director storage, VCL rendering and applying configuration
to the running cache. The agent talks to it through ConfigEngine only.
"""

from varnish_agent.engine.memory import InMemoryEngine, Renderer
from varnish_agent.engine.protocol import ConfigEngine
from varnish_agent.engine.remote import RemoteEngine

__all__ = [
    "ConfigEngine",
    "InMemoryEngine",
    "RemoteEngine",
    "Renderer",
]

"""Typed C# client-proxy generator for hub contracts."""

from .config import GeneratorConfig, load_config
from .errors import ContractLoadError, GenerationError
from .generator import GenerationOutcome, Generator, generate_from_text, generate_source

__all__ = [
    "ContractLoadError",
    "GenerationError",
    "GenerationOutcome",
    "Generator",
    "GeneratorConfig",
    "generate_from_text",
    "generate_source",
    "load_config",
]

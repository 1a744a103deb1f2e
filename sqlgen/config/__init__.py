"""Configuration for sqlgen."""

from .settings import GeneratorSettings, get_generator_settings

__all__ = [
    "GeneratorSettings",
    "get_generator_settings",
]

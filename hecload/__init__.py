"""hecload - synthetic log events for load testing HEC-style collectors."""

from hecload.config import ConfigError, Settings, load_settings
from hecload.catalog import Catalog, EventTemplate, Generator, Literal, build_catalog
from hecload.synthesizer import EventSynthesizer
from hecload.submit import HecClient, SubmitOutcome, is_success, run_iteration

__version__ = "0.1.0"
__all__ = [
    "ConfigError",
    "Settings",
    "load_settings",
    "Catalog",
    "EventTemplate",
    "Generator",
    "Literal",
    "build_catalog",
    "EventSynthesizer",
    "HecClient",
    "SubmitOutcome",
    "is_success",
    "run_iteration",
]

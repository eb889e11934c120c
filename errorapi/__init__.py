"""
errorapi
────────
Stable top-level exports. Import from here, not from sub-modules directly.
"""
from errorapi.core.logging import get_logger
from errorapi.core.errors import (
    ErrorApiError,
    ConfigurationError,
    IntegrationError,
    ValidationError,
)
from errorapi.core.config import get_config, ErrorApiConfig
from errorapi.models import (
    ErrorEvent,
    TraceEntry,
    ClientEnvironment,
    ProjectCredentials,
    ResolvedProject,
)
from errorapi.helpers import slugify, camel2words, url_domain, project_slug
from errorapi.adapters import BaseIntegrationAdapter, SentryAdapter, default_fingerprint

__version__ = "2.1.0"
__all__ = [
    # logging
    "get_logger",
    # errors
    "ErrorApiError", "ConfigurationError", "IntegrationError", "ValidationError",
    # config
    "get_config", "ErrorApiConfig",
    # models
    "ErrorEvent", "TraceEntry", "ClientEnvironment",
    "ProjectCredentials", "ResolvedProject",
    # helpers
    "slugify", "camel2words", "url_domain", "project_slug",
    # adapters
    "BaseIntegrationAdapter", "SentryAdapter", "default_fingerprint",
]

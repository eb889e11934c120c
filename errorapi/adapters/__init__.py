from errorapi.adapters.base import BaseIntegrationAdapter
from errorapi.adapters.sentry import SentryAdapter, default_fingerprint

__all__ = ["BaseIntegrationAdapter", "SentryAdapter", "default_fingerprint"]

"""Core domain: models, configuration, services, observability."""

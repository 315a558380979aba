from .http_manager import HttpManagerFactory, HttpResourceManager

__all__ = ["HttpManagerFactory", "HttpResourceManager"]

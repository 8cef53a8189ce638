# API routes
from labelpdf.api.routes import health, pdf

__all__ = ["health", "pdf"]

"""HTTP middleware."""

from ideaforge.api.middleware.correlation import CorrelationIDMiddleware

__all__ = ["CorrelationIDMiddleware"]

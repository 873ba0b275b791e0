from common.middleware.correlation import CorrelationMiddleware, get_correlation_id, set_correlation_id
from common.middleware.request_limit import RequestSizeLimitMiddleware

__all__ = [
    "CorrelationMiddleware",
    "get_correlation_id",
    "set_correlation_id",
    "RequestSizeLimitMiddleware",
]

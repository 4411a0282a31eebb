from task_service.middleware.auth import ApiKeyMiddleware
from task_service.middleware.metrics import MetricsMiddleware


__all__ = ["ApiKeyMiddleware", "MetricsMiddleware"]

"""Business exceptions shared by the domain, application and infrastructure layers.

The CLI entry point only maps these to an exit status; the layers below never
depend on it.
"""
from __future__ import annotations

from typing import Optional
from shared.codes import BusinessCode


class BusinessException(Exception):
    """Base class for business errors"""

    def __init__(
        self,
        code: int,
        message: str,
        error_type: str = "BusinessError",
        details: Optional[dict] = None,
        field: Optional[str] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.error_type = error_type
        self.details = details
        self.field = field
        super().__init__(self.message)


class FeatureDatasetLoadException(BusinessException):
    """The feature dataset is missing, unreadable or malformed."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            code=BusinessCode.DATASET_LOAD_ERROR,
            message=f"Failed to load feature dataset from {path}: {reason}",
            error_type="FeatureDatasetLoadError",
            details={"path": path, "reason": reason},
            field="db_path",
        )


class RouteGuideConfigException(BusinessException):
    def __init__(self, message: str, *, field: str | None = None, details: dict | None = None):
        super().__init__(
            code=BusinessCode.CONFIG_ERROR,
            message=message,
            error_type="ConfigError",
            details=details,
            field=field,
        )


class EmptyFeatureDatasetException(RouteGuideConfigException):
    """Raised when points must be sampled from a dataset with no features."""

    def __init__(self, path: Optional[str] = None):
        details = {"path": path} if path else None
        super().__init__(
            "Feature dataset is empty, cannot pick route points",
            field="db_path",
            details=details,
        )

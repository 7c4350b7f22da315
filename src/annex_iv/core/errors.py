"""Custom exception classes for Annex IV serialization."""

from typing import Optional


class AnnexIVError(Exception):
    """Base exception for all Annex IV errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class ReportValidationError(AnnexIVError):
    """Report data could not be turned into an AnnexIVReport."""

    def __init__(
        self,
        message: str,
        aif_national_code: Optional[str] = None,
        failed_checks: Optional[list] = None,
        **kwargs,
    ):
        super().__init__(message, error_code="VALIDATION", **kwargs)
        self.aif_national_code = aif_national_code
        self.failed_checks = failed_checks or []
        self.details.update({
            "aif_national_code": aif_national_code,
            "failed_checks": self.failed_checks,
        })


class ConfigurationError(AnnexIVError):
    """Invalid serializer configuration."""

    def __init__(
        self,
        message: str,
        setting: Optional[str] = None,
        value: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, error_code="CONFIGURATION", **kwargs)
        self.setting = setting
        self.value = value
        self.details.update({
            "setting": setting,
            "value": value,
        })

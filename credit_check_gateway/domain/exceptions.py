"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ReportProviderError(DomainException):
    """Report provider returned an error or is unavailable"""

    def __init__(self, message: str, status_code: int | None = None, detail: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class ReportProviderTimeout(ReportProviderError):
    """Report provider did not answer in time"""

    pass


class MalformedReportError(DomainException):
    """Provider answered but the payload carries no report document"""

    pass


class ProviderConfigurationError(DomainException):
    """Provider credentials are missing from configuration"""

    pass


class AuthenticationError(DomainException):
    """Caller identity token is missing, invalid or expired"""

    pass

from __future__ import annotations


class AnalysisError(RuntimeError):
    def __init__(self, message: str, *, code: str = "analysis_failed"):
        super().__init__(message)
        self.code = code


class ValidationError(AnalysisError):
    def __init__(self, message: str, *, field: str):
        super().__init__(message, code="validation_error")
        self.field = field


class EmptyModelResponseError(AnalysisError):
    def __init__(self, message: str = "Empty response from the AI model. Please try again."):
        super().__init__(message, code="empty_response")


class MalformedResponseError(AnalysisError):
    def __init__(self, message: str = "The AI model returned an invalid response. Please try again."):
        super().__init__(message, code="malformed_response")


class ModelAuthenticationError(AnalysisError):
    def __init__(self, message: str = "Invalid or missing AI API key. Please check the server configuration."):
        super().__init__(message, code="auth_error")


class ModelQuotaExceededError(AnalysisError):
    def __init__(self, message: str = "AI API quota exceeded. Please try again later."):
        super().__init__(message, code="quota_exceeded")


class ModelRateLimitError(AnalysisError):
    def __init__(self, message: str = "AI API rate limit exceeded. Please try again in a moment."):
        super().__init__(message, code="rate_limited")


class AnalysisFailedError(AnalysisError):
    def __init__(self, upstream_message: str):
        super().__init__(f"AI analysis failed: {upstream_message}", code="analysis_failed")
        self.upstream_message = upstream_message

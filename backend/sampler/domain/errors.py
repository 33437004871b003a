from __future__ import annotations


class SamplerError(Exception):
    """Base error for request handlers; ``status_code`` drives the HTTP answer."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SamplerError):
    status_code = 400


class NotFoundError(SamplerError):
    status_code = 404


class ConfigurationError(SamplerError):
    status_code = 500


class UpstreamError(SamplerError):
    status_code = 500


class PushDeliveryError(SamplerError):
    status_code = 502

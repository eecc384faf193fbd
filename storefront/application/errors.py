"""Error taxonomy for the storefront service.

Every error carries the HTTP status it maps to; a single exception handler
registered in ``storefront.main`` renders them as ``{"message": ...}``.
"""


class StorefrontError(Exception):
    status_code = 500
    default_message = "internal error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(StorefrontError):
    status_code = 401
    default_message = "unauthorized access"


class Forbidden(StorefrontError):
    status_code = 403
    default_message = "forbidden access"


class NotFound(StorefrontError):
    status_code = 404
    default_message = "not found"


class PaymentNotVerified(StorefrontError):
    status_code = 400
    default_message = "Payment not verified"


class UpstreamUnavailable(StorefrontError):
    status_code = 502
    default_message = "payment processor unavailable"

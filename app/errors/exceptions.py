# coding: utf8


class ApiError(Exception):
    """Base class for errors answered with a stable error kind.

    `status` is the HTTP status, `error` the machine readable kind and
    `message` the human readable text sent back to the caller.
    """

    status = 500
    error = "INTERNAL_ERROR"
    message = "Internal Server Error"

    def __init__(self, message=None, error=None, status=None, data=None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        if error is not None:
            self.error = error
        if status is not None:
            self.status = status
        self.data = data or {}

    def to_dict(self):
        return {
            "code": self.status,
            "error": self.error,
            "message": self.message,
            "data": self.data,
        }


class ValidationError(ApiError):
    status = 400
    error = "VALIDATION_ERROR"
    message = "Request parameters are invalid."


class MissingFields(ValidationError):
    error = "MISSING_FIELDS"
    message = "Required fields are missing."


class EmptyCart(ValidationError):
    error = "EMPTY_CART"
    message = "Cart is empty"


class InvalidStatus(ValidationError):
    error = "INVALID_STATUS"
    message = "Invalid order status"


class AuthError(ApiError):
    status = 401
    error = "AUTH_ERROR"
    message = "Unauthorized"


class AccessDeniedError(ApiError):
    status = 403
    error = "ACCESS_DENIED"
    message = "Access denied"


class NotFoundError(ApiError):
    status = 404
    error = "NOT_FOUND"
    message = "Not found"


class OrderNotFound(NotFoundError):
    error = "ORDER_NOT_FOUND"
    message = "Order not found"


class ConflictError(ApiError):
    status = 409
    error = "CONFLICT"
    message = "Conflict"


class InvalidTransition(ConflictError):
    error = "INVALID_TRANSITION"
    message = "Order status transition is not allowed"


class StorageError(ApiError):
    status = 500
    error = "STORAGE_ERROR"
    message = "Storage failure"

# Pagination Defaults
DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 100

# Roles
ROLE_CUSTOMER = "customer"
ROLE_OWNER = "owner"
ROLE_ADMIN = "admin"
ROLES = (ROLE_CUSTOMER, ROLE_OWNER, ROLE_ADMIN)
STAFF_ROLES = (ROLE_ADMIN, ROLE_OWNER)

# Payment
PAYMENT_CASH_ON_DELIVERY = "cash_on_delivery"
PAYMENT_UPI = "upi"
PAYMENT_METHODS = (PAYMENT_CASH_ON_DELIVERY, PAYMENT_UPI)

# Order status
ORDER_PENDING = "pending"
ORDER_APPROVED = "approved"
ORDER_REJECTED = "rejected"
ORDER_DELIVERED = "delivered"
ORDER_STATUSES = (ORDER_PENDING, ORDER_APPROVED, ORDER_REJECTED, ORDER_DELIVERED)

DEFAULT_ORDER_STATUS_TRANSITIONS = {
    ORDER_PENDING: (ORDER_APPROVED, ORDER_REJECTED, ORDER_DELIVERED),
    ORDER_APPROVED: (),
    ORDER_REJECTED: (),
    ORDER_DELIVERED: (),
}

# Validation
MIN_PASSWORD_LENGTH = 6
MOBILE_LENGTH = 10

TOKEN_EXPIRES_IN = 60 * 60 * 24

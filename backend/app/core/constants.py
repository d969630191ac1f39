"""Application-wide constants for the TuitionHub platform."""

from __future__ import annotations

BRAND_NAME = "TuitionHub"

# API metadata
API_TITLE = f"{BRAND_NAME} API"
API_DESCRIPTION = "Backend for the TuitionHub tutoring marketplace"
API_VERSION = "1.0.0"

# Root greeting kept for frontend uptime checks
ROOT_GREETING = "Hello from Server.."

# Listing defaults
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# Keeps page * size inside a 64-bit OFFSET
MAX_PAGE = 10_000_000
LATEST_TUITIONS_LIMIT = 3

# Payments
PAYMENT_STATUS_PAID = "paid"
ORDER_STATUS_PAID = "Paid"
UNKNOWN_CUSTOMER_NAME = "Unknown"
CHECKOUT_SUCCESS_PATH = "/payment-success?session_id={CHECKOUT_SESSION_ID}"
CHECKOUT_CANCEL_PATH = "/dashboard/applied-tutors"

# ULID path segments (Crockford base32, 26 chars)
ULID_PATH_PATTERN = r"^[0-9A-HJKMNP-TV-Z]{26}$"

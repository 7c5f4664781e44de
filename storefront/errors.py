"""
Common Error Constants

Centralized error messages to avoid string duplication.
"""

# Auth errors
ERROR_INVALID_CREDENTIALS = "Invalid username or password"
ERROR_SESSION_EXPIRED = "Session has expired"
ERROR_SESSION_INVALID = "Session is invalid"
ERROR_NOT_AUTHENTICATED = "Not authenticated"

# Product errors
ERROR_PRODUCT_NOT_FOUND = "Product not found"

# Catalog errors
ERROR_CATALOG_UNAVAILABLE = "Catalog service unavailable"
ERROR_CATALOG_TIMEOUT = "Catalog request timed out"
ERROR_CATALOG_BAD_RESPONSE = "Catalog returned an invalid response"

# Generic errors
ERROR_INTERNAL = "Internal server error"
ERROR_NO_DATA = "No data available"

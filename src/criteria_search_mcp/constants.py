"""Constants and configuration for criteria search."""

import os

# Dataset loader
API_BASE_URL = os.getenv("API_BASE_URL", "https://jsonplaceholder.typicode.com/todos")
REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "30"))
USER_AGENT = "CriteriaSearchMCP/1.0 (Language=Python)"

HELPER_TEXT = "Insert data url. Returning data MUST be an array JSON with each element is key/value pair."

# Error messages surfaced to tool callers
ERROR_MESSAGES = {
    "invalid_url": "URL is invalid",
    "load_failed": "Error loading data from url",
    "parse_failed": "Error parsing data from url",
    "numeric_value": "Value must be numeric",
    "no_dataset": "No dataset loaded. Call load_dataset() first.",
    "auth_failed": "Invalid or missing auth token. Please call get_auth_token() first to obtain a valid token.",
}

# Partial numeric input accepted while a GT/LT value is being typed
NUMERIC_INPUT_PATTERN = r"^-?\d*\.?\d*$"

# Complete decimal literal accepted when coercing strings to numbers
NUMBER_PATTERN = r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$"

# Separator used for nested field lookups ("address.city")
FIELD_PATH_SEPARATOR = "."

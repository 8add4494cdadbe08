"""Application-level constants."""

from pathlib import Path

SELLER_ROLE = "seller"

# User-facing messages
LOAD_FAILED_MESSAGE = "Failed to load form data. Please refresh the page."
SUBMIT_FAILED_MESSAGE = "Failed to submit form. Please try again."

# Output locations for CLI runs
OUTPUT_ROOT = Path("outputs")
LOG_FILENAME = "listing.log"
PAYLOAD_FILENAME = "payload.json"

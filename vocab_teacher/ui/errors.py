from __future__ import annotations

FAILURE_PREFIX = "Failed to generate explanations. "

API_KEY_HINT = "Please check your OpenAI API key configuration."
QUOTA_HINT = "You may have exceeded your OpenAI API usage quota."
NETWORK_HINT = "Please check your internet connection and try again."
RETRY_HINT = "Please try again in a moment."


def classify_error(message: str) -> str:
    """Turn a raw failure message into the hint shown to the user."""
    if "API key" in message:
        hint = API_KEY_HINT
    elif "quota" in message or "billing" in message:
        hint = QUOTA_HINT
    elif "network" in message or "fetch" in message:
        hint = NETWORK_HINT
    else:
        hint = RETRY_HINT
    return FAILURE_PREFIX + hint

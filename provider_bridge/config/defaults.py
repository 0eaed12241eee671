"""provider_bridge.config.defaults
==============================

Central place for small, stable default values used across the bridge. These
defaults can be overridden through environment variables or the external
config file (see ``provider_bridge.config``), but provide sensible fallbacks
for local development and tests.

Module Purpose
--------------
- Provide a single import location for conservative default constants (no I/O).
- Keep the normalization core free of magic literals.

This module intentionally avoids importing from other bridge packages to
prevent circular dependencies. Only plain constants should live here.
"""

from __future__ import annotations

# ---- Authentication ----
# Protocol version header value sent with every Anthropic request.
ANTHROPIC_API_VERSION = "2023-06-01"
# Generic mapping applied to providers missing from the registry.
GENERIC_AUTH_MODE = "bearer"  # "bearer" | "disabled"
GENERIC_AUTH_HEADER = "authorization"
GENERIC_AUTH_PREFIX = "Bearer "

# ---- Provider endpoints ----
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
GOOGLE_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEEPSEEK_DEFAULT_BASE_URL = "https://api.deepseek.com/v1"
XAI_DEFAULT_BASE_URL = "https://api.x.ai/v1"

# Anthropic rejects requests without max_tokens.
ANTHROPIC_DEFAULT_MAX_TOKENS = 1024

# ---- Aggregation ----
NO_RESPONSE_FALLBACK = "I don't have any response to provide."
TOOL_FAILURE_SUMMARY = (
    "I attempted to use tools to help with your request, but encountered errors. "
    "Please try again."
)
TOOL_RESULTS_LEAD_IN = "Here are the results:"
APPENDED_TOOL_RESULTS_DELIMITER = "\n\n---\n\nTool Results:\n"
INCOMPLETE_FINISH_REASON = "incomplete"
DEFAULT_TOOL_RESULT_STYLE = "integrated"

# ---- Sanitization ----
REDACTED = "[REDACTED]"
TRUNCATED = "[TRUNCATED]"
SANITIZE_MAX_DEPTH = 32

# ---- HTTP ----
HTTP_TIMEOUT_SECONDS = 30.0
STREAM_TIMEOUT_SECONDS = 60.0

# ---- Tool execution ----
TOOL_TIMEOUT_SECONDS = 5.0


__all__ = [
    "ANTHROPIC_API_VERSION",
    "GENERIC_AUTH_MODE",
    "GENERIC_AUTH_HEADER",
    "GENERIC_AUTH_PREFIX",
    "OPENAI_DEFAULT_BASE_URL",
    "OPENROUTER_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "GOOGLE_DEFAULT_BASE_URL",
    "DEEPSEEK_DEFAULT_BASE_URL",
    "XAI_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_MAX_TOKENS",
    "NO_RESPONSE_FALLBACK",
    "TOOL_FAILURE_SUMMARY",
    "TOOL_RESULTS_LEAD_IN",
    "APPENDED_TOOL_RESULTS_DELIMITER",
    "INCOMPLETE_FINISH_REASON",
    "DEFAULT_TOOL_RESULT_STYLE",
    "REDACTED",
    "TRUNCATED",
    "SANITIZE_MAX_DEPTH",
    "HTTP_TIMEOUT_SECONDS",
    "STREAM_TIMEOUT_SECONDS",
    "TOOL_TIMEOUT_SECONDS",
]

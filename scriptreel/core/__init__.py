"""
Core Module - Cross-cutting concerns and shared infrastructure

Organization:
    - logging.py: Structured logging configuration and utilities
    - exceptions.py: Error taxonomy shared by every service boundary
    - runtime.py: Environment parsing and startup checks
    - auth.py: Owner identity from signed bearer tokens
    - sanitizer.py: Narration script sanitizer

Usage:
    from scriptreel.core import get_logger, sanitize_script, OwnerContext
"""

# Logging
from .logging import (
    setup_logging,
    get_logger,
    set_request_id,
    set_job_id,
    clear_context,
    LogTimer,
)

# Exceptions
from .exceptions import (
    ScriptReelError,
    ValidationError,
    ConfigurationError,
    ProviderError,
    GenerationTimeoutError,
    PersistenceError,
    AlreadyInProgressError,
    NotFoundError,
    AuthenticationError,
    ScriptGenerationError,
    InternalError,
)

# Runtime guards
from .runtime import (
    parse_bool_env,
    assert_directory_writable,
    run_startup_runtime_checks,
)

# Identity
from .auth import (
    OwnerContext,
    SESSION_COOKIE_NAME,
    ANONYMOUS_USER_ID,
    is_auth_enabled,
    issue_auth_token,
    verify_auth_token,
    resolve_owner,
    require_owner,
)

# Script text
from .sanitizer import SECTION_LABELS, sanitize_script

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "set_request_id",
    "set_job_id",
    "clear_context",
    "LogTimer",
    # Exceptions
    "ScriptReelError",
    "ValidationError",
    "ConfigurationError",
    "ProviderError",
    "GenerationTimeoutError",
    "PersistenceError",
    "AlreadyInProgressError",
    "NotFoundError",
    "AuthenticationError",
    "ScriptGenerationError",
    "InternalError",
    # Runtime guards
    "parse_bool_env",
    "assert_directory_writable",
    "run_startup_runtime_checks",
    # Identity
    "OwnerContext",
    "SESSION_COOKIE_NAME",
    "ANONYMOUS_USER_ID",
    "is_auth_enabled",
    "issue_auth_token",
    "verify_auth_token",
    "resolve_owner",
    "require_owner",
    # Script text
    "SECTION_LABELS",
    "sanitize_script",
]

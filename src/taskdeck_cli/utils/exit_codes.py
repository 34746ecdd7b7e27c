"""Process exit codes.

Scripts can branch on these to tell "sign in first" (3) from "not on the
allow-list" (6) from "the deployment has no allow-list at all" (7).
"""

SUCCESS = 0
ERROR_GENERAL = 1
ERROR_INVALID_ARGS = 2
ERROR_AUTH_FAILURE = 3
# 4 is left unused
ERROR_NOT_FOUND = 5
ERROR_PERMISSION_DENIED = 6
ERROR_CONFIGURATION = 7
ERROR_CONFLICT = 8

_TABLE: dict[int, tuple[str, str]] = {
    SUCCESS: ("SUCCESS", "Command executed successfully"),
    ERROR_GENERAL: ("ERROR_GENERAL", "A general error occurred"),
    ERROR_INVALID_ARGS: ("ERROR_INVALID_ARGS", "Invalid arguments or validation error"),
    ERROR_AUTH_FAILURE: ("ERROR_AUTH_FAILURE", "Not signed in; run 'taskdeck auth login'"),
    ERROR_NOT_FOUND: ("ERROR_NOT_FOUND", "Resource not found"),
    ERROR_PERMISSION_DENIED: ("ERROR_PERMISSION_DENIED", "Your email is not on the allow-list"),
    ERROR_CONFIGURATION: ("ERROR_CONFIGURATION", "The allow-list is not configured"),
    ERROR_CONFLICT: ("ERROR_CONFLICT", "Resource is still referenced by tasks"),
}


def get_exit_code_name(code: int) -> str:
    return _TABLE[code][0] if code in _TABLE else f"UNKNOWN({code})"


def get_exit_code_description(code: int) -> str:
    return _TABLE[code][1] if code in _TABLE else "Unknown error"

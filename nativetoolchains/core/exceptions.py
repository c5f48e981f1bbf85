"""
Centralized exception hierarchy for NativeToolchains.

Toolkit discovery failures are expected and recoverable: the locator turns
them into "not found" plus a diagnostic. Only configuration errors and
conflicting registrations are meant to reach the caller.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class NativeToolchainsError(Exception):
    """Base exception for all NativeToolchains errors."""

    pass


# ============================================================================
# Probe / Discovery Exceptions
# ============================================================================


class ProbeNotFoundError(NativeToolchainsError):
    """Raised when a probed path does not exist."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Path not found: {path}")


class ToolkitUnavailableError(NativeToolchainsError):
    """Raised when a cross-compilation toolkit cannot be located."""

    def __init__(self, kind, message: str):
        self.kind = kind
        super().__init__(message)


class MalformedToolkitLayoutError(ToolkitUnavailableError):
    """Raised when a toolkit root exists but its internal layout is missing."""

    def __init__(self, kind, root, missing: str):
        self.root = root
        self.missing = missing
        super().__init__(kind, f"{kind} at {root} is missing {missing}")


# ============================================================================
# Registration Exceptions
# ============================================================================


class RegistrationError(NativeToolchainsError):
    """Base exception for toolchain registration errors."""

    pass


class ConfigurationConflictError(RegistrationError):
    """Raised when a target is claimed by more than one toolchain."""

    def __init__(self, target, names):
        self.target = target
        self.names = tuple(names)
        super().__init__(
            f"Target {target} is serviced by more than one toolchain: "
            f"{', '.join(self.names)}"
        )


class UnknownTargetError(NativeToolchainsError, ValueError):
    """Raised for a target machine outside the supported set."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(NativeToolchainsError):
    """Configuration parsing or validation error."""

    pass

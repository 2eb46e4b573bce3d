from __future__ import annotations


class GmcError(RuntimeError):
    """Base for every failure that aborts module creation."""


class UsageError(GmcError):
    pass


class TemplateNotFoundError(GmcError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown template set: {name}")
        self.name = name


class WorkspaceCreationError(GmcError):
    def __init__(self, path: str, cause: OSError) -> None:
        super().__init__(f"Failed to create module directory: {path}: {cause}")
        self.path = path
        self.cause = cause


class ToolInvocationError(GmcError):
    """An external tool exited non-zero or could not be started."""

    def __init__(self, label: str, *, tool: str, stderr: str = "") -> None:
        detail = (stderr or "").strip()
        super().__init__(f"{label}: {detail}" if detail else label)
        self.label = label
        self.tool = tool
        self.stderr = detail


class RepositoryError(ToolInvocationError):
    IDENTITY_MISSING = "identity_missing"
    IDENTITY_LOOKUP_FAILED = "identity_lookup_failed"
    INIT_FAILED = "init_failed"
    STAGE_FAILED = "stage_failed"
    COMMIT_FAILED = "commit_failed"
    REMOTE_FAILED = "remote_failed"

    def __init__(self, label: str, *, kind: str, stderr: str = "", tool: str = "git") -> None:
        super().__init__(label, tool=tool, stderr=stderr)
        self.kind = kind


class ConfigurationError(GmcError):
    """Required user configuration is missing; the message says what to set."""

    def __init__(self, message: str, *, kind: str = RepositoryError.IDENTITY_MISSING) -> None:
        super().__init__(message)
        self.kind = kind


class InvalidModuleNameError(GmcError):
    def __init__(self, module: str) -> None:
        super().__init__(f"Invalid module name: {module!r}")
        self.module = module


class CreateModuleError(GmcError):
    """A step of module creation failed; `error` is the underlying failure."""

    def __init__(self, module: str, *, step: str, error: BaseException, prefix: str = "") -> None:
        super().__init__(f"Failed to create Go module: {module}: {prefix}{error}")
        self.module = module
        self.step = step
        self.error = error

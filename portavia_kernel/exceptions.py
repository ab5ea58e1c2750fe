"""
Typed exception hierarchy for the Portavia dashboard back end.

Every error has a typed class, a ``code`` class attribute (machine-readable,
API-safe) and carries structured data as attributes, so callers catch by
type and log by field rather than parsing messages.

    PortaviaError (base)
    |
    +-- FactSourceError
    |   +-- FactQueryError
    |   +-- ProjectNotFoundError
    |
    +-- ConfigurationError
        +-- InvalidThresholdError

Category        | Code                 | When Raised
----------------|----------------------|-------------------------------------------
Fact source     | FACT_QUERY_FAILED    | A read against the fact source raised
                | PROJECT_NOT_FOUND    | The overview view has no row for the id
----------------|----------------------|-------------------------------------------
Configuration   | CONFIGURATION_ERROR  | Configuration file is structurally invalid
                | INVALID_THRESHOLD    | A threshold is negative or out of range

The derivation engines never raise these: degenerate input is absorbed by
defaulting and clamping. Only the gathering layer and the configuration
loader surface errors, before the summary assembler is invoked.

Handling pattern (rendering layer):

    try:
        dashboard = service.load(project_id)
    except ProjectNotFoundError:
        show_not_found()
    except FactQueryError as e:
        show_error_banner(code=e.code, query=e.query_name)
"""


class PortaviaError(Exception):
    """
    Base exception for all Portavia errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "PORTAVIA_ERROR"


# Fact source exceptions


class FactSourceError(PortaviaError):
    """Base exception for fact source errors."""

    code: str = "FACT_SOURCE_ERROR"


class FactQueryError(FactSourceError):
    """A single fact source read failed."""

    code: str = "FACT_QUERY_FAILED"

    def __init__(self, query_name: str, project_id: str, reason: str):
        self.query_name = query_name
        self.project_id = project_id
        self.reason = reason
        super().__init__(
            f"Fact query {query_name} failed for project {project_id}: {reason}"
        )


class ProjectNotFoundError(FactSourceError):
    """The project overview has no row for the requested project."""

    code: str = "PROJECT_NOT_FOUND"

    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__(f"Project not found: {project_id}")


# Configuration exceptions


class ConfigurationError(PortaviaError):
    """Configuration could not be loaded or is structurally invalid."""

    code: str = "CONFIGURATION_ERROR"


class InvalidThresholdError(ConfigurationError):
    """A configured threshold is outside its allowed range."""

    code: str = "INVALID_THRESHOLD"

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid threshold {field}={value!r}: {reason}")

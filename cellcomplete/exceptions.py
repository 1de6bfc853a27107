"""Cellcomplete exception hierarchy.

All cellcomplete exceptions inherit from CompletionError and support cause
chaining. None of them escape get_completion_items(); they exist so registries
and loaders can signal failures that the engine then degrades.
"""


class CompletionError(Exception):
    """Base exception for all cellcomplete errors.

    Wraps original errors as __cause__ for proper exception chaining.
    """

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause


class RegistryError(CompletionError):
    """Raised when a namespace registry cannot answer a query.

    Examples: namespace unloaded between two queries, reflection failure.
    """

    def __init__(
        self,
        message: str,
        *,
        namespace: str = "",
        cause: Exception | None = None,
    ):
        super().__init__(message, cause=cause)
        self.namespace = namespace


class ManifestError(CompletionError):
    """Raised when a namespace manifest fails to parse or validate."""

    pass


class SettingsError(CompletionError):
    """Raised when completion settings cannot be loaded."""

    pass

"""classrepo exception hierarchy.

All classrepo-specific exceptions inherit from ClassRepoError,
enabling structured error handling and cleaner catch clauses.
Repository errors additionally carry a short label, a detailed
explanation and a stable numeric code for programmatic matching.
"""


class ClassRepoError(Exception):
    """Base exception for all classrepo errors."""

    def __init__(self, message: str = "", *, retryable: bool = False) -> None:
        super().__init__(message)
        self.retryable = retryable


class ConfigError(ClassRepoError):
    """Invalid or missing configuration."""


class ClassRepositoryError(ClassRepoError):
    """Error raised by the class repository cache."""

    code: int = 0
    label: str = "Class repository error"

    def __init__(self, details: str = "", *, repository_id: str | None = None) -> None:
        super().__init__(f"{self.label}: {details}" if details else self.label)
        self.details = details
        self.repository_id = repository_id


class RepositoryExistsError(ClassRepositoryError):
    """A cache ID was initialized twice."""

    code = 173501
    label = "Cache ID already exists"


class CacheClearFailedError(ClassRepositoryError):
    """The cache file could not be deleted."""

    code = 173502
    label = "Failed to clear cache"


CacheClearError = CacheClearFailedError


class LoaderInvalidResultError(ClassRepositoryError):
    """A class loader callback did not return a ClassRepository."""

    code = 173503
    label = "Invalid loader result"


class RepositoryNotFoundError(ClassRepositoryError):
    code = 173504
    label = "Cache ID not found"


class StoreCorruptError(ClassRepositoryError):
    """The cache file exists but does not hold a valid index."""

    code = 173505
    label = "Corrupt cache file"


class CacheFolderNotSetError(ClassRepositoryError):
    code = 111003
    label = "Cache folder not set"


class ClassNotFoundError(ClassRepositoryError):
    """A dotted class name could not be imported."""

    code = 111001
    label = "Cannot resolve class"


class ClassNotInstanceOfError(ClassRepositoryError):
    code = 111004
    label = "Class not an instance"

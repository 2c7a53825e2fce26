"""
This module implements custom exceptions
"""

# Standard
from collections import namedtuple
from typing import List, Optional

## Base Error ##################################################################


class LandscaperError(Exception):
    """Base class for all landscaper exceptions"""

    def __init__(self, message: str, is_fatal_error: bool):
        """Construct with a flag indicating whether this is a fatal error. This
        will be a static property of all children.
        """
        super().__init__(message)
        self._is_fatal_error = is_fatal_error

    @property
    def is_fatal_error(self):
        """Property indicating whether or not this error should abort the
        reconciliation pass
        """
        return self._is_fatal_error


## Fatal Errors ################################################################


class LandscaperFatalError(LandscaperError):
    """A LandscaperFatalError is one that indicates an unexpected failure while
    reconciling that will not resolve by itself
    """

    def __init__(self, message: str = ""):
        super().__init__(message=message, is_fatal_error=True)


class ConfigError(LandscaperFatalError):
    """Exception caused by invalid component declarations or library config"""


class BackendError(LandscaperFatalError):
    """Exception caused when a collaborator (chart loader, release backend or
    secret store) fails in an unexpected way
    """


class DetectionError(LandscaperFatalError):
    """Exception raised when deciding whether a component needs a forced update
    fails. The original error is chained as the cause.
    """

    def __init__(self, component_name: str, message: str = ""):
        self.component_name = component_name
        super().__init__(
            message or f"Failed to detect forced update for [{component_name}]"
        )


# A single component which could not be applied
ComponentFailure = namedtuple("ComponentFailure", ["component_name", "phase", "error"])


class ReconcileError(LandscaperFatalError):
    """Exception indicating that one or more components failed to apply"""

    def __init__(
        self,
        failures: List[ComponentFailure],
        message: Optional[str] = None,
    ):
        self.failures = failures
        super().__init__(
            message
            or "Failed to apply components: "
            + ", ".join(
                f"{failure.phase} [{failure.component_name}]: {failure.error}"
                for failure in failures
            )
        )


## Expected Errors #############################################################


class LandscaperExpectedError(LandscaperError):
    """A LandscaperExpectedError is one that callers are expected to handle
    when it describes the state they wanted anyway
    """

    def __init__(self, message: str = ""):
        super().__init__(message=message, is_fatal_error=False)


class NotFoundError(LandscaperExpectedError):
    """Exception raised when the target of an operation does not exist"""


class AlreadyExistsError(LandscaperExpectedError):
    """Exception raised when the target of a create operation already exists"""


## Assertions ##################################################################


def assert_config(condition: bool, message: str = ""):
    """Replacement for assert() which will throw a ConfigError. This should be
    used when validating a component declaration or the library config.
    """
    if not condition:
        raise ConfigError(message)


def assert_backend(condition: bool, message: str = ""):
    """Replacement for assert() which will throw a BackendError. This should
    be used when a collaborator returns something unusable.
    """
    if not condition:
        raise BackendError(message)

"""
This defines the capability base classes for reading, writing and deleting
component secrets.
"""

# Standard
from typing import List, Optional
import abc

# Local
from ..component import SecretValues
from ..events import AlogEventSink, EventSink


class _SecretsBase:
    """Shared construction for all secret adapters"""

    def __init__(self, event_sink: Optional[EventSink] = None):
        self.events = event_sink or AlogEventSink("SECRT")


class SecretsReaderBase(_SecretsBase, abc.ABC):
    """Capability to read the secret values of a component"""

    @abc.abstractmethod
    def read(
        self,
        component_name: str,
        namespace: str,
        secret_names: List[str],
    ) -> SecretValues:
        """Read the secret values for a component

        Args:
            component_name:  str
                Name of the component owning the secrets
            namespace:  str
                Namespace of the component
            secret_names:  List[str]
                Names of the secrets to read. Adapters may ignore this and
                return everything stored for the component.

        Returns:
            secret_values:  SecretValues
                Mapping from secret name to value. Empty if nothing is stored.
        """


class SecretsWriteDeleterBase(_SecretsBase, abc.ABC):
    """Capability to write and delete the secret values of a component"""

    @abc.abstractmethod
    def write(
        self,
        component_name: str,
        namespace: str,
        secret_values: SecretValues,
    ):
        """Store the secret values for a component, replacing any previous
        values. The namespace is created if needed.
        """

    @abc.abstractmethod
    def delete(self, component_name: str, namespace: str):
        """Delete all secret values stored for a component. Deleting values
        which do not exist succeeds.
        """


class SecretsReadWriteDeleterBase(SecretsReaderBase, SecretsWriteDeleterBase):
    """Full read, write and delete capability"""

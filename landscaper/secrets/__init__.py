"""
Secret stores hold the resolved secret values for each component, keyed by the
component name and namespace.
"""

# Local
from .base import SecretsReaderBase, SecretsReadWriteDeleterBase, SecretsWriteDeleterBase
from .environment_secrets_reader import EnvironmentSecretsReader
from .in_memory_secrets_store import InMemorySecretsStore
from .kube_secrets_store import KubeSecretsStore

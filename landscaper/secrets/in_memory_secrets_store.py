"""
The InMemorySecretsStore keeps component secrets in a local map
"""

# Standard
from typing import Dict, List, Optional, Set, Tuple
import copy

# Local
from ..component import SecretValues
from ..events import EventSink
from .base import SecretsReadWriteDeleterBase


class InMemorySecretsStore(SecretsReadWriteDeleterBase):
    """Secret store backed by a dict keyed by (namespace, component_name)"""

    def __init__(
        self,
        secrets: Optional[Dict[Tuple[str, str], SecretValues]] = None,
        event_sink: Optional[EventSink] = None,
    ):
        super().__init__(event_sink)
        self._secrets = copy.deepcopy(secrets or {})
        self.namespaces: Set[str] = {namespace for namespace, _ in self._secrets}

        # Every call made against the store in order as (operation, name)
        self.calls = []

    def read(
        self,
        component_name: str,
        namespace: str,
        secret_names: List[str],
    ) -> SecretValues:
        self.calls.append(("read", component_name))
        stored = self._secrets.get((namespace, component_name))
        if stored is None:
            self.events(
                "no_secrets_found",
                "debug",
                component=component_name,
                namespace=namespace,
            )
            return {}
        for secret_name in secret_names:
            if secret_name not in stored:
                self.events(
                    "secret_missing",
                    "warning",
                    component=component_name,
                    namespace=namespace,
                    secret=secret_name,
                )
        return dict(stored)

    def write(
        self,
        component_name: str,
        namespace: str,
        secret_values: SecretValues,
    ):
        self.calls.append(("write", component_name))
        self.namespaces.add(namespace)
        self._secrets[(namespace, component_name)] = dict(secret_values)
        self.events(
            "secrets_written",
            component=component_name,
            namespace=namespace,
            count=len(secret_values),
        )

    def delete(self, component_name: str, namespace: str):
        self.calls.append(("delete", component_name))
        if self._secrets.pop((namespace, component_name), None) is None:
            self.events(
                "no_secrets_found",
                "debug",
                component=component_name,
                namespace=namespace,
            )
            return
        self.events("secrets_deleted", component=component_name, namespace=namespace)

    def get(self, component_name: str, namespace: str) -> Optional[SecretValues]:
        """Direct access to the stored values for assertions"""
        return self._secrets.get((namespace, component_name))

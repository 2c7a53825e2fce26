"""
The KubeSecretsStore keeps each component's secrets in an Opaque kubernetes
Secret named after the component, in the component's namespace.
"""

# Standard
from typing import List, Optional
import base64

# Third Party
from openshift.dynamic import DynamicClient
from openshift.dynamic.exceptions import ConflictError, DynamicApiError, NotFoundError
import kubernetes

# First Party
import alog

# Local
from .. import constants
from ..component import SecretValues
from ..events import EventSink
from ..exceptions import BackendError
from ..utils import to_bytes
from .base import SecretsReadWriteDeleterBase

log = alog.use_channel("KSECR")


class KubeSecretsStore(SecretsReadWriteDeleterBase):
    """Secret store using the openshift DynamicClient against the cluster"""

    def __init__(
        self,
        client: Optional[DynamicClient] = None,
        event_sink: Optional[EventSink] = None,
    ):
        """
        Args:
            client:  Optional[DynamicClient]
                Client to use. If not given, one is created lazily from the
                in-cluster config or the local kubeconfig.
            event_sink:  Optional[EventSink]
                Sink for the store's events
        """
        super().__init__(event_sink)
        self._client = client

    @property
    def client(self) -> DynamicClient:
        """Lazy property access to the client"""
        if self._client is None:
            self._client = self._setup_client()
        return self._client

    ## Interface ###############################################################

    def read(
        self,
        component_name: str,
        namespace: str,
        secret_names: List[str],
    ) -> SecretValues:
        """Read every key in the component's Secret. The requested names are
        only used to report missing keys.
        """
        fields = {"component": component_name, "namespace": namespace}
        self.events("reading_secrets", "debug", **fields)
        try:
            secret = self._secrets_api().get(name=component_name, namespace=namespace)
        except NotFoundError:
            self.events("no_secrets_found", "debug", **fields)
            return {}
        except DynamicApiError as err:
            self.events("read_secrets_failed", "error", error=err, **fields)
            raise BackendError(
                f"Failed to read secrets for [{component_name}] in [{namespace}]"
            ) from err

        data = _to_dict(secret).get("data") or {}
        secret_values = {
            key: base64.b64decode(value) for key, value in data.items()
        }
        for secret_name in secret_names:
            if secret_name not in secret_values:
                self.events("secret_missing", "warning", secret=secret_name, **fields)
        self.events("read_secrets", "debug", **fields)
        return secret_values

    def write(
        self,
        component_name: str,
        namespace: str,
        secret_values: SecretValues,
    ):
        fields = {"component": component_name, "namespace": namespace}
        self.events("writing_secrets", **fields)
        self._ensure_namespace(namespace, fields)

        body = {
            "apiVersion": "v1",
            "kind": "Secret",
            "type": constants.SECRET_TYPE_OPAQUE,
            "metadata": {"name": component_name, "namespace": namespace},
            "data": {
                key: base64.b64encode(to_bytes(value)).decode("ascii")
                for key, value in secret_values.items()
            },
        }
        secrets_api = self._secrets_api()
        try:
            try:
                secrets_api.create(body=body, namespace=namespace)
            except ConflictError:
                log.debug2("Secret [%s/%s] exists, replacing", namespace, component_name)
                secrets_api.replace(body=body, namespace=namespace)
        except DynamicApiError as err:
            self.events("write_secrets_failed", "error", error=err, **fields)
            raise BackendError(
                f"Failed to write secrets for [{component_name}] in [{namespace}]"
            ) from err
        self.events("secrets_written", **fields)

    def delete(self, component_name: str, namespace: str):
        fields = {"component": component_name, "namespace": namespace}
        self.events("deleting_secrets", **fields)
        try:
            self._secrets_api().delete(name=component_name, namespace=namespace)
        except NotFoundError:
            self.events("no_secrets_found", **fields)
            return
        except DynamicApiError as err:
            self.events("delete_secrets_failed", "error", error=err, **fields)
            raise BackendError(
                f"Failed to delete secrets for [{component_name}] in [{namespace}]"
            ) from err
        self.events("secrets_deleted", **fields)

    ## Implementation Helpers ##################################################

    def _secrets_api(self):
        return self.client.resources.get(api_version="v1", kind="Secret")

    def _ensure_namespace(self, namespace: str, fields: dict):
        """Create the namespace, treating "already exists" as success"""
        namespaces_api = self.client.resources.get(api_version="v1", kind="Namespace")
        try:
            namespaces_api.create(
                body={
                    "apiVersion": "v1",
                    "kind": "Namespace",
                    "metadata": {"name": namespace},
                }
            )
            log.debug("Created namespace [%s]", namespace)
        except ConflictError:
            log.debug3("Namespace [%s] already exists", namespace)
        except DynamicApiError as err:
            self.events("ensure_namespace_failed", "error", error=err, **fields)
            raise BackendError(f"Failed to ensure namespace [{namespace}]") from err

    @staticmethod
    def _setup_client():
        """Create a DynamicClient that will work based on where the library is
        running
        """
        try:
            log.debug2("Running with in-cluster config")
            kube_config = kubernetes.client.Configuration()
            kubernetes.config.load_incluster_config(client_configuration=kube_config)
            api_client = kubernetes.client.ApiClient(kube_config)
            return DynamicClient(api_client)

        except kubernetes.config.ConfigException:
            log.debug2("Running with out-of-cluster config")
            return DynamicClient(kubernetes.config.new_client_from_config())


def _to_dict(resource) -> dict:
    """ResourceInstance objects expose to_dict, plain dicts are returned as is"""
    if hasattr(resource, "to_dict"):
        return resource.to_dict()
    return dict(resource or {})

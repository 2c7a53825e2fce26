"""
The EnvironmentSecretsReader reads secret values from environment variables
"""

# Standard
from typing import List
import os

# Local
from ..component import SecretValues
from ..utils import env_var_name
from .base import SecretsReaderBase


class EnvironmentSecretsReader(SecretsReaderBase):
    """Reads each requested secret from the environment variable named after
    the secret upper cased with "-" replaced by "_". The component name and
    namespace are ignored.
    """

    def read(
        self,
        component_name: str,
        namespace: str,
        secret_names: List[str],
    ) -> SecretValues:
        secret_values = {}
        for secret_name in secret_names:
            env_name = env_var_name(secret_name)
            value = os.environ.get(env_name, "")
            if not value:
                self.events(
                    "secret_not_in_environment",
                    "warning",
                    secret=secret_name,
                    env_name=env_name,
                    component=component_name,
                )
            secret_values[secret_name] = value.encode("utf-8")
        return secret_values

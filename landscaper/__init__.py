"""
Package exports
"""

# Local
from . import config
from .chart_loader import (
    Chart,
    ChartLoaderBase,
    ChartTemplate,
    HelmChartLoader,
    InMemoryChartLoader,
    LocalChartLoader,
)
from .component import (
    Component,
    Components,
    Configuration,
    Metadata,
    Release,
    Secrets,
    SecretValues,
)
from .cron_detector import is_cron_job, make_cron_job_predicate
from .differ import diff, integrate_forced_updates, is_only_secret_value_diff
from .events import AlogEventSink, Event, EventSink, RecordingEventSink
from .exceptions import (
    AlreadyExistsError,
    BackendError,
    ComponentFailure,
    ConfigError,
    DetectionError,
    LandscaperError,
    NotFoundError,
    ReconcileError,
)
from .executor import ApplyResult, Executor
from .release_backend import DryRunReleaseBackend, HelmReleaseBackend, ReleaseBackendBase
from .secrets import (
    EnvironmentSecretsReader,
    InMemorySecretsStore,
    KubeSecretsStore,
    SecretsReaderBase,
    SecretsReadWriteDeleterBase,
    SecretsWriteDeleterBase,
)

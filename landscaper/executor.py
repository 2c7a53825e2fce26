"""
The Executor drives a single reconciliation pass: it diffs desired against
current components, decides which updates must be forced, and applies the
resulting deletes, creates and updates against the release backend and secret
store.
"""

# Standard
from typing import Callable, Dict, List, Optional

# First Party
import alog

# Local
from . import config, constants
from .chart_loader import ChartLoaderBase
from .component import Component, Components
from .cron_detector import ForcedUpdatePredicate, make_cron_job_predicate
from .differ import diff, integrate_forced_updates, is_only_secret_value_diff
from .events import AlogEventSink, EventSink
from .exceptions import ComponentFailure, DetectionError, ReconcileError, assert_config
from .log_format import generate_reconciliation_id
from .release_backend import ReleaseBackendBase
from .secrets import SecretsWriteDeleterBase

log = alog.use_channel("EXCTR")


class ApplyResult:
    """Outcome of a reconciliation pass"""

    def __init__(self, reconciliation_id: str = ""):
        self.reconciliation_id = reconciliation_id
        self.created: List[str] = []
        self.updated: List[str] = []
        self.deleted: List[str] = []
        self.refreshed: List[str] = []
        self.failures: List[ComponentFailure] = []

    @property
    def success(self) -> bool:
        return not self.failures

    def __repr__(self):
        return (
            f"ApplyResult(created={self.created}, updated={self.updated}, "
            f"deleted={self.deleted}, failures={len(self.failures)})"
        )


class Executor:
    """Reconciles components against a release backend and secret store"""

    def __init__(  # pylint: disable=too-many-arguments
        self,
        release_backend: ReleaseBackendBase,
        chart_loader: ChartLoaderBase,
        secrets: SecretsWriteDeleterBase,
        dry_run: Optional[bool] = None,
        force: Optional[bool] = None,
        fail_fast: Optional[bool] = None,
        forced_update_predicates: Optional[List[ForcedUpdatePredicate]] = None,
        event_sink: Optional[EventSink] = None,
    ):
        """
        Args:
            release_backend:  ReleaseBackendBase
                Backend that installs, updates and deletes releases
            chart_loader:  ChartLoaderBase
                Loader that resolves chart references to local charts
            secrets:  SecretsWriteDeleterBase
                Store for the components' secret values
            dry_run:  Optional[bool]
                If true, no release is installed, updated or deleted and no
                secrets are deleted. Charts are still resolved and secrets
                still written. Defaults to the dry_run config.
            force:  Optional[bool]
                If true, every update is applied as a delete and create.
                Defaults to the force config.
            fail_fast:  Optional[bool]
                If true, the pass stops at the first failing component.
                Otherwise every component is attempted and all failures are
                reported together. Defaults to the fail_fast config.
            forced_update_predicates:  Optional[List[ForcedUpdatePredicate]]
                Predicates deciding whether an update must be forced. Defaults
                to the scheduled workload check against the chart loader.
            event_sink:  Optional[EventSink]
                Sink for the executor's events
        """
        self.release_backend = release_backend
        self.chart_loader = chart_loader
        self.secrets = secrets
        self.dry_run = config.dry_run if dry_run is None else dry_run
        self.force = config.force if force is None else force
        self.fail_fast = config.fail_fast if fail_fast is None else fail_fast
        self.forced_update_predicates = (
            forced_update_predicates
            if forced_update_predicates is not None
            else [make_cron_job_predicate(chart_loader)]
        )
        self.events = event_sink or AlogEventSink("EXCTR")

        # Set for the duration of apply so that every event of the pass
        # carries it
        self._reconciliation_id = None

    ## Reconciliation ##########################################################

    def apply(self, desired: Components, current: Components) -> ApplyResult:
        """Converge the current components toward the desired components

        Args:
            desired:  Components
                The declared components keyed by name
            current:  Components
                The components observed in the environment keyed by name

        Returns:
            result:  ApplyResult
                The names applied in each phase

        Raises:
            DetectionError if deciding on a forced update fails
            ReconcileError if any component fails to apply
        """
        self._reconciliation_id = generate_reconciliation_id()
        try:
            return self._apply(desired, current)
        finally:
            self._reconciliation_id = None

    def need_forced_updates(self, update: Components) -> Dict[str, bool]:
        """Evaluate the forced update predicates for every update

        Raises:
            DetectionError attributed to the first component whose predicates
            fail
        """
        need_forced_update = {}
        for name in sorted(update):
            if self.force:
                need_forced_update[name] = True
                continue
            try:
                need_forced_update[name] = any(
                    predicate(update[name])
                    for predicate in self.forced_update_predicates
                )
            except Exception as err:  # pylint: disable=broad-except
                self._emit("detection_failed", "error", component=name, error=err)
                raise DetectionError(name) from err
            if need_forced_update[name]:
                self._emit("forced_update", component=name)
        return need_forced_update

    ## Component operations ####################################################

    def create_component(self, component: Component):
        """Install a new release for the component. Secrets are written before
        the install so the release can mount them.
        """
        fields = self._fields(component, constants.PHASE_CREATE)
        self._emit("creating_component", **fields)
        chart_path = self._load_chart(component)

        if component.secrets:
            self.secrets.write(
                component.name, component.namespace, component.secret_values
            )

        if self.dry_run:
            self._emit("dry_run_skip", **fields)
            return
        self.release_backend.install(
            chart_path,
            component.namespace,
            component.name,
            values=dict(component.configuration),
        )
        self._emit("component_created", **fields)

    def update_component(self, component: Component):
        """Upgrade the component's release in place after replacing its
        secrets
        """
        fields = self._fields(component, constants.PHASE_UPDATE)
        self._emit("updating_component", **fields)
        chart_path = self._load_chart(component)

        self._replace_secrets(component)

        if self.dry_run:
            self._emit("dry_run_skip", **fields)
            return
        self.release_backend.update(
            component.name,
            chart_path,
            namespace=component.namespace,
            values=dict(component.configuration),
        )
        self._emit("component_updated", **fields)

    def delete_component(self, component: Component):
        """Delete the component's release and its secrets, whether or not it
        declares any. Only the name and namespace are needed, so components
        read back without a chart or metadata can still be removed.
        """
        assert_config(bool(component.name), "Component name must not be empty")
        fields = self._fields(component, constants.PHASE_DELETE)
        self._emit("deleting_component", **fields)
        if self.dry_run:
            self._emit("dry_run_skip", **fields)
            return
        self.release_backend.delete(component.name, namespace=component.namespace)
        self.secrets.delete(component.name, component.namespace)
        self._emit("component_deleted", **fields)

    def refresh_secrets(self, component: Component):
        """Replace the stored secrets of a component whose only change is its
        secret values. The release itself is left untouched.
        """
        assert_config(bool(component.name), "Component name must not be empty")
        fields = self._fields(component, constants.PHASE_REFRESH)
        self._emit("refreshing_secrets", **fields)
        self._replace_secrets(component)
        self._emit("secrets_refreshed", **fields)

    ## Implementation Helpers ##################################################

    def _apply(self, desired: Components, current: Components) -> ApplyResult:
        create, update, delete = diff(desired, current)
        self._emit(
            "diff_computed",
            create=sorted(create),
            update=sorted(update),
            delete=sorted(delete),
        )
        refresh = {
            name: desired_cmp
            for name, desired_cmp in desired.items()
            if name in current
            and is_only_secret_value_diff(desired_cmp, current[name])
        }

        need_forced_update = self.need_forced_updates(update)
        create, update, delete = integrate_forced_updates(
            current, create, update, delete, need_forced_update
        )

        # Deletes go first so that forced updates are gone before they are
        # created again
        result = ApplyResult(self._reconciliation_id)
        phases = [
            (constants.PHASE_DELETE, delete, self.delete_component, result.deleted),
            (constants.PHASE_CREATE, create, self.create_component, result.created),
            (constants.PHASE_UPDATE, update, self.update_component, result.updated),
            (
                constants.PHASE_REFRESH,
                refresh,
                self.refresh_secrets,
                result.refreshed,
            ),
        ]
        for phase, components, apply_fn, applied in phases:
            self._apply_phase(phase, components, apply_fn, applied, result)

        if result.failures:
            raise ReconcileError(result.failures)
        self._emit(
            "apply_succeeded",
            created=result.created,
            updated=result.updated,
            deleted=result.deleted,
            refreshed=result.refreshed,
        )
        return result

    def _apply_phase(  # pylint: disable=too-many-arguments
        self,
        phase: str,
        components: Components,
        apply_fn: Callable[[Component], None],
        applied: List[str],
        result: ApplyResult,
    ):
        for name in sorted(components):
            with alog.ContextTimer(log.debug2, "%s duration for %s: ", phase, name):
                try:
                    apply_fn(components[name])
                except Exception as err:  # pylint: disable=broad-except
                    log.debug("Caught error during %s of [%s]", phase, name, exc_info=True)
                    self._emit(
                        "component_failed", "error", component=name, phase=phase, error=err
                    )
                    result.failures.append(ComponentFailure(name, phase, err))
                    if self.fail_fast:
                        raise ReconcileError(result.failures) from err
                    continue
            applied.append(name)

    def _replace_secrets(self, component: Component):
        """Drop the previous secret entry and write the declared values. A dry
        run keeps the previous entry and only writes.
        """
        if not self.dry_run:
            self.secrets.delete(component.name, component.namespace)
        if component.secrets:
            self.secrets.write(
                component.name, component.namespace, component.secret_values
            )

    def _load_chart(self, component: Component) -> str:
        """Resolve the component's chart to a local path"""
        component.validate()
        chart_ref = component.full_chart_ref()
        _, chart_path = self.chart_loader.load(chart_ref)
        log.debug2("Resolved [%s] to [%s]", chart_ref, chart_path)
        return chart_path

    def _emit(self, name: str, level: str = "info", **fields):
        if self._reconciliation_id:
            fields["reconciliation_id"] = self._reconciliation_id
        self.events(name, level, **fields)

    @staticmethod
    def _fields(component: Component, phase: str) -> dict:
        return {
            "component": component.name,
            "namespace": component.namespace,
            "phase": phase,
        }

"""
Pure functions that classify components into the create, update and delete
sets for a single reconciliation pass
"""

# Standard
from typing import Dict, Tuple

# First Party
import alog

# Local
from .component import Component, Components

log = alog.use_channel("DIFFR")


def diff(
    desired: Components,
    current: Components,
) -> Tuple[Components, Components, Components]:
    """Compute the components to create, update and delete to move from the
    current state to the desired state

    Args:
        desired:  Components
            The declared components keyed by name
        current:  Components
            The components observed in the environment keyed by name

    Returns:
        create:  Components
            Desired components with no current counterpart
        update:  Components
            Desired values of components that differ from their current value
            in anything other than their secret values
        delete:  Components
            Current components with no desired counterpart
    """
    create = {}
    update = {}
    delete = {}

    for name, desired_cmp in desired.items():
        current_cmp = current.get(name)
        if current_cmp is None:
            log.debug2("[%s] is new", name)
            create[name] = desired_cmp
        elif desired_cmp != current_cmp:
            log.debug2("[%s] differs from current", name)
            update[name] = desired_cmp
        else:
            log.debug3("[%s] is unchanged", name)

    for name, current_cmp in current.items():
        if name not in desired:
            log.debug2("[%s] is no longer desired", name)
            delete[name] = current_cmp

    log.debug(
        "Diff result: %d create, %d update, %d delete",
        len(create),
        len(update),
        len(delete),
    )
    return create, update, delete


def is_only_secret_value_diff(a: Component, b: Component) -> bool:
    """True if the two components are identical apart from differing secret
    values
    """
    return a == b and a.secret_values != b.secret_values


def integrate_forced_updates(
    current: Components,
    create: Components,
    update: Components,
    delete: Components,
    need_forced_update: Dict[str, bool],
) -> Tuple[Components, Components, Components]:
    """Turn every update flagged in need_forced_update into a delete of the
    current component plus a create of the desired one. The given dicts are not
    modified.

    Args:
        current:  Components
            The components observed in the environment
        create:  Components
            Components to create, as returned by diff
        update:  Components
            Components to update, as returned by diff
        delete:  Components
            Components to delete, as returned by diff
        need_forced_update:  Dict[str, bool]
            Per name flag marking updates that cannot happen in place

    Returns:
        create:  Components
        update:  Components
        delete:  Components
    """
    create = dict(create)
    update = dict(update)
    delete = dict(delete)

    for name in [name for name in update if need_forced_update.get(name, False)]:
        log.debug("Forcing update of [%s] through delete and create", name)
        create[name] = update.pop(name)
        delete[name] = current[name]

    return create, update, delete

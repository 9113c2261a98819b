"""
Comparison of two secret snapshots.

A diff sorts every differing key into exactly one of four categories:
- added: only in the target snapshot
- removed: only in the source snapshot
- modified: in both, with different values
- local_only: explicitly flagged as local; wins over every other category

Keys with identical values in both snapshots are left out entirely.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, NamedTuple, Optional, Set


logger = logging.getLogger(__name__)

LOCAL_PREFIX = "LOCAL_"
LOCAL_SUFFIX = "_LOCAL"


class Modification(NamedTuple):
    """Old and new value of a changed key."""
    old: str
    new: str


@dataclass(frozen=True)
class DiffResult:
    """Differences between a source and a target snapshot."""
    added: Dict[str, str] = field(default_factory=dict)
    modified: Dict[str, Modification] = field(default_factory=dict)
    removed: Dict[str, str] = field(default_factory=dict)
    local_only: Dict[str, str] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.modified or self.removed or self.local_only)

    def counts(self) -> Dict[str, int]:
        """Number of keys per category, in presentation order."""
        return {
            'added': len(self.added),
            'modified': len(self.modified),
            'removed': len(self.removed),
            'local_only': len(self.local_only),
        }


def diff(
    source: Mapping[str, str],
    target: Mapping[str, str],
    local_only_keys: Optional[Iterable[str]] = None
) -> DiffResult:
    """
    Compare two snapshots.

    Keys are visited once each: source keys in source order, then keys
    that only the target has, in target order.

    Args:
        source: Snapshot the changes are relative to (e.g. the local .env)
        target: Snapshot being compared against it (e.g. the remote set)
        local_only_keys: Keys to report as local-only instead of
            added/removed/modified

    Returns:
        DiffResult with four disjoint categories
    """
    local_only_keys = set(local_only_keys or ())

    added: Dict[str, str] = {}
    modified: Dict[str, Modification] = {}
    removed: Dict[str, str] = {}
    local_only: Dict[str, str] = {}

    union = list(source) + [key for key in target if key not in source]

    for key in union:
        in_source = key in source
        in_target = key in target

        if key in local_only_keys:
            local_only[key] = source[key] if in_source else target[key]
        elif not in_source:
            added[key] = target[key]
        elif not in_target:
            removed[key] = source[key]
        elif source[key] != target[key]:
            modified[key] = Modification(old=source[key], new=target[key])

    result = DiffResult(added=added, modified=modified, removed=removed, local_only=local_only)
    logger.debug("Diff computed: %s", result.counts())
    return result


def is_local_only_key(key: str) -> bool:
    """Check the LOCAL_ prefix / _LOCAL suffix naming convention."""
    return key.startswith(LOCAL_PREFIX) or key.endswith(LOCAL_SUFFIX)


def detect_local_only_keys(
    secrets: Mapping[str, str],
    remote: Optional[Mapping[str, str]] = None
) -> Set[str]:
    """
    Find keys that are local-only by naming convention.

    A LOCAL_* key that the remote snapshot also defines is an ordinary key
    and is compared like any other.

    Args:
        secrets: Local snapshot to scan
        remote: Remote snapshot; keys it defines are never local-only

    Returns:
        Set of keys named LOCAL_* or *_LOCAL that remote lacks
    """
    remote = remote or {}
    return {key for key in secrets if is_local_only_key(key) and key not in remote}


def apply_diff(current: Mapping[str, str], result: DiffResult) -> Dict[str, str]:
    """
    Merge a diff into a snapshot, bringing it in line with the target.

    Removed keys are dropped, modified keys take their new value and added
    keys are appended. Local-only keys keep their local value; a local-only
    key that current does not have is left out.

    Args:
        current: Snapshot to update (normally the diff's source)
        result: Diff computed against the target snapshot

    Returns:
        New ordered mapping; current is not modified
    """
    merged: Dict[str, str] = {}

    for key, value in current.items():
        if key in result.removed:
            continue
        if key in result.modified:
            merged[key] = result.modified[key].new
        else:
            merged[key] = value

    for key, value in result.added.items():
        merged[key] = value

    return merged

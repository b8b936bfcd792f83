"""
Download status state machine.

The only legal path is pending -> processing -> completed | failed.
Terminal states accept no further changes.

Dependencies: None (pure domain layer)
System role: Transition rules shared by the store and the lifecycle engine
"""

import enum


class DownloadStatus(str, enum.Enum):
    """
    Download lifecycle states.

    PENDING: Accepted, waiting for the lifecycle engine to claim it
    PROCESSING: Engine is advancing progress
    COMPLETED: Finished; result_location is set
    FAILED: Aborted; diagnostic holds the error message
    """

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (DownloadStatus.COMPLETED, DownloadStatus.FAILED)


ALLOWED_TRANSITIONS: dict[DownloadStatus, frozenset[DownloadStatus]] = {
    DownloadStatus.PENDING: frozenset({DownloadStatus.PROCESSING}),
    DownloadStatus.PROCESSING: frozenset({DownloadStatus.COMPLETED, DownloadStatus.FAILED}),
    DownloadStatus.COMPLETED: frozenset(),
    DownloadStatus.FAILED: frozenset(),
}

# Field each terminal status must carry.
TERMINAL_FIELDS: dict[DownloadStatus, str] = {
    DownloadStatus.COMPLETED: "result_location",
    DownloadStatus.FAILED: "diagnostic",
}


def can_transition(current: DownloadStatus, target: DownloadStatus) -> bool:
    """Return True if moving from current to target is a legal step."""
    return target in ALLOWED_TRANSITIONS[current]


def source_statuses(target: DownloadStatus) -> list[DownloadStatus]:
    """
    List the statuses a job may be in immediately before entering target.

    Used to build the conditional UPDATE that makes the check-and-set atomic.
    """
    return [status for status, targets in ALLOWED_TRANSITIONS.items() if target in targets]

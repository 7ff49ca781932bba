"""Change events emitted by manifest state transitions.

State-changing operations do not print anything themselves. They hand a
``ChangeEvent`` to an event sink supplied by the caller; when no sink is
given the event goes to this module's logger at INFO level.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ChangeAction(Enum):
    """Kind of state change a manifest line went through."""

    ENABLE = "enable"
    DISABLE = "disable"
    UPDATE = "update"
    ADD = "add"


@dataclass(frozen=True)
class ChangeEvent:
    """One change applied to a manifest line.

    Attributes:
        action: What happened to the line
        package: Name of the package declared on the line
        version: Version involved (the current version for toggles, the new
            one for updates and additions)
        file_path: Manifest the line belongs to
    """

    action: ChangeAction
    package: str
    version: str
    file_path: PathLike

    @property
    def message(self) -> str:
        if self.action is ChangeAction.UPDATE:
            return f"Updating package {self.package} to version {self.version} in file {self.file_path}"
        if self.action is ChangeAction.ENABLE:
            return f"Enabling package {self.package} at version {self.version} in file {self.file_path}"
        if self.action is ChangeAction.DISABLE:
            return f"Disabling package {self.package} at version {self.version} in file {self.file_path}"
        return f"Adding package {self.package} at version {self.version} in file {self.file_path}"

    def __str__(self) -> str:
        return self.message


EventSink = Callable[[ChangeEvent], None]


def log_event(event: ChangeEvent) -> None:
    """Default sink: log the event message."""
    logger.info(event.message)


def emit(event: ChangeEvent, sink: EventSink | None = None) -> None:
    """Deliver an event to ``sink``, or to the logger when no sink is given."""
    (sink or log_event)(event)

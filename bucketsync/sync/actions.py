# bucketsync Transfer Actions
# Per-object outcomes and per-job reports

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from bucketsync.config.schema import TransferDirection


class ActionType(str, Enum):
    """Outcome of handling one object or file."""

    # Copier
    COPIED = "copied"
    EXISTS = "exists"  # Already present at destination, recorded
    CACHED = "cached"  # Recorded as copied, no storage call made

    # Uploader
    UPLOADED = "uploaded"
    UNCHANGED = "unchanged"  # Fingerprint matches recorded one

    # Downloader
    DOWNLOADED = "downloaded"

    # Directory placeholders and keys without a name
    SKIPPED = "skipped"

    # Storage or local fault; item left untouched
    ERROR = "error"


@dataclass
class TransferAction:
    """What happened to a single object."""

    key: str
    action_type: ActionType
    transfer_key: Optional[str] = None
    reason: str = ""
    error: Optional[str] = None

    @property
    def is_transfer(self) -> bool:
        """Check if data was moved."""
        return self.action_type in (ActionType.COPIED, ActionType.UPLOADED, ActionType.DOWNLOADED)

    @property
    def is_error(self) -> bool:
        return self.action_type == ActionType.ERROR

    @property
    def is_already_present(self) -> bool:
        """Check if the object was found to be up to date."""
        return self.action_type in (ActionType.EXISTS, ActionType.CACHED, ActionType.UNCHANGED)


@dataclass
class TransferReport:
    """Result of running one transfer job."""

    name: str
    direction: TransferDirection
    actions: list[TransferAction] = field(default_factory=list)
    aborted: bool = False
    error_message: Optional[str] = None

    def add(self, action: TransferAction) -> TransferAction:
        self.actions.append(action)
        return action

    def count(self, action_type: ActionType) -> int:
        return sum(1 for action in self.actions if action.action_type == action_type)

    @property
    def total(self) -> int:
        return len(self.actions)

    @property
    def transferred(self) -> int:
        return sum(1 for action in self.actions if action.is_transfer)

    @property
    def already_present(self) -> int:
        return sum(1 for action in self.actions if action.is_already_present)

    @property
    def skipped(self) -> int:
        return self.count(ActionType.SKIPPED)

    @property
    def errors(self) -> int:
        return self.count(ActionType.ERROR)

    @property
    def success(self) -> bool:
        """True when the job ran to the end without item errors."""
        return not self.aborted and self.errors == 0

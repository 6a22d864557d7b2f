"""Per-invocation counters and the final report line."""

from __future__ import annotations

from dataclasses import dataclass

from dnssec_rollover.domain.models.rollover_outcome import (
    CleanupOutcome,
    ZoneAction,
    ZoneActionOutcome,
)


@dataclass
class RunSummary:
    """Counters aggregated across all zones of one invocation.

    Attributes:
        initiated: Zones where a new key was introduced.
        completed: Zones whose rollover was completed.
        baselined: Zones seen for the first time.
        skipped: Zones with nothing to do (stable, in hold, unreadable markers).
        deleted: Deactivated keys deleted after their grace period.
        failed: Failed key API calls and zones that could not be processed.
    """

    initiated: int = 0
    completed: int = 0
    baselined: int = 0
    skipped: int = 0
    deleted: int = 0
    failed: int = 0

    def record_action(self, outcome: ZoneActionOutcome) -> None:
        """Fold one zone's phase action into the counters."""
        if outcome.action == ZoneAction.BASELINED:
            self.baselined += 1
        elif outcome.action == ZoneAction.INITIATED:
            self.initiated += 1
        elif outcome.action == ZoneAction.COMPLETED:
            self.completed += 1
        elif outcome.action == ZoneAction.SKIPPED:
            self.skipped += 1
        else:
            self.failed += 1
        self.failed += outcome.failed_key_count

    def record_cleanup(self, outcome: CleanupOutcome) -> None:
        """Fold one zone's cleanup sweep into the counters."""
        self.deleted += len(outcome.deleted_key_ids)
        self.failed += outcome.failed_count

    def record_failure(self) -> None:
        """Count a zone step that could not be carried out at all."""
        self.failed += 1

    def as_dict(self) -> dict[str, int]:
        """Counters as a plain mapping, in report order."""
        return {
            "initiated": self.initiated,
            "completed": self.completed,
            "baselined": self.baselined,
            "skipped": self.skipped,
            "deleted": self.deleted,
            "failed": self.failed,
        }

    def render(self) -> str:
        """Render the one-line report printed at the end of a run.

        Example:
            ``Rollover summary: initiated=1 completed=0 baselined=2 skipped=5 deleted=0 failed=0``
        """
        counters = " ".join(f"{name}={value}" for name, value in self.as_dict().items())
        return f"Rollover summary: {counters}"

"""Application services - Use case orchestration.

Available services:
- RolloverMetadataService: Typed access to rollover markers
- RolloverEngine: Executes the action implied by a zone's phase
- CleanupSweep: Deletes deactivated keys after their grace period
- RolloverRunService: One invocation over all candidate zones
"""

from dnssec_rollover.application.services.cleanup_sweep import CleanupSweep
from dnssec_rollover.application.services.rollover_engine import (
    RolloverEngine,
    select_superseded_keys,
)
from dnssec_rollover.application.services.rollover_metadata_service import (
    RolloverMetadataService,
)
from dnssec_rollover.application.services.rollover_run_service import (
    RolloverRunService,
)

__all__: list[str] = [
    "CleanupSweep",
    "RolloverEngine",
    "RolloverMetadataService",
    "RolloverRunService",
    "select_superseded_keys",
]

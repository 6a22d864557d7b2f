"""Domain services - pure functions over domain models."""

from dnssec_rollover.domain.services.phase_decider import decide_phase, whole_days_between

__all__: list[str] = ["decide_phase", "whole_days_between"]

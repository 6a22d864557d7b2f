"""
dnssec-rollover - Automated DNSSEC signing-key rollover for PowerDNS.

A scheduled job that walks every zone holding an active signing key and
moves it through a bounded lifecycle:

- baseline: first sighting of a zone records today's date
- initiate: after the rollover interval a new key is pre-published
- hold: the new key waits out parent DS propagation
- complete: older keys of the same type/algorithm are deactivated
- cleanup: deactivated keys are deleted after a grace period

Key generation and signing stay with the PowerDNS server; this package only
observes key state and requests transitions through its HTTP API.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]

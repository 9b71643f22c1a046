"""
Artha Sync - Source Package

Offline-first backup/restore of a personal finance tracker's local data
to a per-user cloud document, plus the in-app notifications raised by
budget, goal, bill and recurring-transaction events.

DESIGN PRINCIPLES:
1. The device is the source of truth; the cloud holds one full copy
2. Last backup wins, no merging
3. Secrets never leave the device
4. Failures are reported, never thrown at the UI
5. Notifications never block the action that caused them
"""

__version__ = "1.0.0"
__author__ = "Artha Team"

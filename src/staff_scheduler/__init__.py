"""Staff scheduling package.

Organized by feature modules (shifts, schedules, attendance, reports, ...)
with pure domain functions over a company snapshot and thin service classes
that persist changes through collaborator protocols.
"""

__version__ = "0.1.0"

"""dotstrap: interactive workstation provisioning.

Core design goals:
- Idempotent steps, safe to re-run from the top
- Answers persisted so an interrupted run resumes without re-prompting
- One immutable configuration built at startup
- Centralized logging
"""

__all__ = []

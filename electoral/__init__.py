"""
Name: Electoral Core

Role-gated election workflow for the COHSSA student elections: session-derived
authorization, append-only audit trail and the aspirant -> candidate lifecycle.
"""

__version__ = "0.1.0"

"""
Lost & Found Network - Multi-Enterprise Dispute Resolution

Adjudication engine for ownership disputes where two or more parties,
possibly from different enterprises (universities, transit authority,
airport security), claim the same recovered item.

Core guarantees:
- A dispute always has at least two distinct claimants
- One writer per dispute; readers see complete snapshots
- A dispute ends in exactly one of RESOLVED or ESCALATED
- Decisions depend only on the final recorded votes, never arrival order
"""

__version__ = "0.1.0"
__all__ = ["__version__"]

"""Domain layer for the dispute resolution engine.

Contains the DisputeCase aggregate, its owned components, the stateless
resolution and escalation services, and the error taxonomy. Nothing in
this package performs I/O.
"""

"""Infrastructure layer - adapters for the dispute engine's ports.

IMPORT RULES:
- CAN import from: application, domain, config
- CANNOT import from: api
"""

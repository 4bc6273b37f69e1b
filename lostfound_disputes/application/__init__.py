"""
Application layer - Use cases and orchestration for the dispute engine.

This layer contains:
- Application services (per-dispute serialization, collaborator calls)
- Port definitions (abstract interfaces for infrastructure)
- DTOs handed to the API layer

IMPORT RULES:
- CAN import from: domain, config
- CANNOT import from: infrastructure, api
"""

"""
Skitsystem - Player and Game Registry Service

Responsibilities:
- Player registry (create, lookup, list)
- Game registry (create, list)
- Translate HTTP requests into registry operations
- Publish registry events (optional, redis)
- Request counters for observability
"""

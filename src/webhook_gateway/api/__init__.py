"""
webhook_gateway.api

HTTP API package.

Responsibilities:
- App factory, dependency wiring and routers.
"""

# Package marker.

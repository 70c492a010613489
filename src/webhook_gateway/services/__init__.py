"""
webhook_gateway.services

Service layer.

Responsibilities:
- Registry mutations behind the admin routes.
"""

# Package marker.

"""
webhook_gateway.registry

User registry clients.

Responsibilities:
- Define the registry interface used by the authorizer and admin service.
- Provide SQL and Firestore backends.
"""

# Package marker.

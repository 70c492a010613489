"""
webhook_gateway.auth

Authentication/authorization package.

Responsibilities:
- Token generation.
- The registry-backed authorizer.
- FastAPI dependencies enforcing user/admin privilege.
"""

# Package marker.

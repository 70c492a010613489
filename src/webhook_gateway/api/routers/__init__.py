"""
webhook_gateway.api.routers

Route modules: health checks, admin mutations, webhook forwarding.
"""

# Package marker.

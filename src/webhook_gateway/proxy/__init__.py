"""
webhook_gateway.proxy

Reverse-proxy forwarding to configured webhook targets.

Responsibilities:
- Parse and validate the forwarding table at startup.
- Relay authorized requests to a fixed upstream URL.
"""

# Package marker.

"""HTTP and WebSocket surface of the donation alert service."""

"""HTTP API: app factory, routers and schemas."""

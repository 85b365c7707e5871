"""HTTP boundary: routers, dependencies and error handlers."""

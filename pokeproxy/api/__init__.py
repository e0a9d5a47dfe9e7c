"""HTTP layer: routers, dependencies and exception handlers."""

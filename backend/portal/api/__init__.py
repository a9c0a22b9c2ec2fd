"""
HTTP layer.
- deps: store dependency, cookie helpers and the access guard suite
- handlers: exception handlers for the route boundary
- routers: auth, profile, teams and page routes
"""

"""Domain layer.

Routing vocabulary with no knowledge of transports or frameworks beyond the
path-template compiler:
- entities/: Route, RouteCollection, HTTPMethod
- value_objects/: VersionId, AcceptHeader, NegotiatedRequestContext
- protocols/: ports for logging, exception override handlers and formatters
"""

"""
Domain layer: models, event schemas and the routing services.
"""

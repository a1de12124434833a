"""
Application core: lifespan, CORS and shared request dependencies.
"""

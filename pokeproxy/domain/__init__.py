"""
Domain package for the Pokedex Proxy.

This package contains the domain models returned to callers. The domain
layer is independent of the upstream API and of the web framework.
"""

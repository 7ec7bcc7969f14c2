"""
Domain packages: each exposes a facade over its services and repositories.
"""

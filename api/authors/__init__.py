"""
Author resource: repository, business logic and HTTP endpoints.
"""

"""
Post resource: repository, business logic and HTTP endpoints.

Every post read joins the referenced author.
"""

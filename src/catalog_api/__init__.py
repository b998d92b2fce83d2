"""Product catalog REST API.

In-memory product catalog with CRUD, filtering, search, sorting, pagination
and statistics, served by FastAPI behind static API-key authentication.
"""

__version__ = "1.0.0"

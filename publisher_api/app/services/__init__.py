"""
Service layer.

Each service encapsulates the business logic of one domain (accounts,
publishers) on top of a ``Database`` handle passed in by the caller,
so API handlers stay free of SQL.
"""

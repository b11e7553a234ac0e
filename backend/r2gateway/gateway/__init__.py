"""
Gateway router: maps method, headers and path onto bucket operations.
"""

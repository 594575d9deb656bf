"""
Query builders and data transformations used by the routers.
"""

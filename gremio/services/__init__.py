"""
Shared Gremio services.
"""

"""
Service layer.
- accounts: login (credential verification) and registration
- profile: preference replacement and profile self-update
- teams: static team lookup
"""

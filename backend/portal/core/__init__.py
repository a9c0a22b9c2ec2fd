"""
Core application modules.
Contains essential infrastructure components:
- db: Store configuration and the user store adapter
- errors: Error taxonomy shared by services, guards and handlers
- security: Password hashing and session token signing/verification
"""

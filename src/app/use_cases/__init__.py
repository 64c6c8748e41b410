"""
Use Cases

Organized into domain folders:
- auth/: Login, session authentication, sweeping and session info
"""

"""Infrastructure modules for the match notifications service.

Centralized infrastructure components:
- notifications: Push delivery credential, FCM channel and fan-out dispatcher
- operations: Operation results and HTTP error classification
"""

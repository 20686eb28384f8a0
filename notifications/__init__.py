"""
Notifications App for FreelanceHub.

In-app notification inbox. Notifications are created by the outbox
dispatcher from events recorded by the projects and applications services.
"""

"""Identity provider sync.

Mirrors identity provider lifecycle events (user.created, user.updated,
user.deleted) into the local user directory. The provider stays the system
of record for identity; this app only keeps the directory in step.
"""

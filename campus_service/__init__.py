"""Package marker for the campus notification service.

Serves per-user notifications and keeps a liveness heartbeat against the
backend API.
"""

__version__ = "1.0.0"

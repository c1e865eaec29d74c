"""Core module for LearnHub.

Contains the session orchestrator and view handlers.
"""

from learnhub.core.session import LearnHubSession

__all__ = ["LearnHubSession"]

"""
Service Layer Package

Business logic services separating the HTTP routes from the store layer.

Core Services:
- UserService: Sign-up, login, stats, achievements, leaderboard
- CheckInService: Period check-ins, streaks, points, eligibility
- WordService: Current period word and word history
- GlossaryProvider: Read-only word catalogue
"""

from glossary_reminders.services.container import ServiceContainer, get_container, init_container, reset_container

__all__ = [
    "ServiceContainer",
    "get_container",
    "init_container",
    "reset_container",
]

"""
Prometheus metrics definitions for glossary-reminders.

Organized by category:
- HTTP/API metrics: Request counts, latency
- Check-in metrics: Check-in outcomes, points awarded
- Word metrics: Period word assignments
- User activity metrics: Registrations, logins, achievements

Metrics are exposed at the /metrics endpoint for Prometheus scraping.
"""

import logging
from prometheus_client import Counter, Gauge, Histogram

logger = logging.getLogger(__name__)

# =============================================================================
# HTTP/API Metrics
# =============================================================================

http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests received",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

http_requests_in_progress = Gauge(
    "http_requests_in_progress",
    "Number of HTTP requests currently being processed",
    ["method", "endpoint"],
)

# =============================================================================
# Check-in Metrics
# =============================================================================

checkins_total = Counter(
    "checkins_total",
    "Check-in attempts by result",
    ["result"],  # result: success/already_checked_in/word_unavailable/conflict
)

points_awarded_total = Counter(
    "points_awarded_total",
    "Knowledge points awarded across all users",
)

# =============================================================================
# Word Metrics
# =============================================================================

period_words_total = Counter(
    "period_words_total",
    "Period word assignments by outcome",
    ["outcome"],  # outcome: created/race_recovered/transient
)

glossary_loaded = Gauge(
    "glossary_loaded",
    "1 if the glossary is loaded, 0 otherwise",
)

# =============================================================================
# User Activity Metrics
# =============================================================================

user_registrations_total = Counter(
    "user_registrations_total",
    "Total user registrations",
)

logins_total = Counter(
    "logins_total",
    "Login attempts by result",
    ["result"],  # result: success/failure
)

achievements_unlocked_total = Counter(
    "achievements_unlocked_total",
    "Achievements unlocked",
    ["achievement"],
)

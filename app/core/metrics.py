"""Метрики Prometheus."""

from prometheus_client import Counter, Histogram

PR_CREATED_TOTAL = Counter("pr_created_total", "Total number of created PRs")

PR_REASSIGNED_TOTAL = Counter(
    "pr_reassigned_total", "Total number of PR reviewer reassignments"
)

TEAM_CREATED_TOTAL = Counter("team_created_total", "Total number of created teams")

TEAM_DEACTIVATED_TOTAL = Counter(
    "team_deactivated_total", "Total number of team deactivations"
)

OPERATION_DURATION = Histogram(
    "service_operation_duration_seconds",
    "Duration of service operations",
    ["operation"],
)

OPERATION_ERRORS = Counter(
    "service_operation_errors_total",
    "Total number of failed service operations",
    ["operation", "code"],
)

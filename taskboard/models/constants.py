"""Constants for taskboard.

This module centralizes all magic numbers and default values used throughout the application.
"""

from taskboard.models.task import TaskPriority, TaskStatus


# Task defaults
DEFAULT_STATUS = TaskStatus.TODO
DEFAULT_PRIORITY = TaskPriority.MEDIUM
DEFAULT_OWNER = "unassigned"
DEFAULT_EFFORT_HOURS = 1.0

# Field constraints
MAX_TITLE_LENGTH = 200
MAX_OWNER_LENGTH = 80
MAX_EFFORT_HOURS = 200.0
MAX_TAGS = 8
MAX_TAG_LENGTH = 24

# Risk classification
AT_RISK_THRESHOLD_HOURS = 48

# Score weights. The non-priority components together span less than
# PRIORITY_TIER_POINTS, so priority always dominates the blended score.
PRIORITY_WEIGHTS = {
    TaskPriority.LOW: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.HIGH: 3,
    TaskPriority.CRITICAL: 4,
}
PRIORITY_TIER_POINTS = 100
URGENCY_DUE_POINTS = 40.0  # Reached as the due date arrives
URGENCY_TAIL_POINTS = 2.0  # Any dated open task; decays past the horizon
URGENCY_MAX_OVERDUE_POINTS = 10.0  # Extra points, 1 per day overdue
URGENCY_HORIZON_HOURS = 14 * 24
AGE_POINTS_PER_DAY = 1.0
AGE_MAX_POINTS = 10.0
EFFORT_POINTS_PER_HOUR = 0.1
BLOCKED_BONUS = 7.0
DONE_PENALTY = 5.0

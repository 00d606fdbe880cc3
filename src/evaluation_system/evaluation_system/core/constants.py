"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""


class StorageKeys:
    ACCOUNTS = "accounts"
    EMPLOYEES = "employees"
    SUBMISSIONS = "submissions"
    DELETED_EMPLOYEES = "deletedEmployees"
    SUSPENDED_EMPLOYEES = "suspendedEmployees"
    PENDING_REGISTRATIONS = "pending_registrations"
    APPROVED_REGISTRATIONS = "approvedRegistrations"
    REJECTED_REGISTRATIONS = "rejectedRegistrations"
    SEEN_SUBMISSIONS = "seenEvaluationSubmissions"
    NOTIFICATIONS = "notifications"
    PROFILES = "profiles"
    APPROVAL_DATA_PREFIX = "approvalData_"

    @classmethod
    def approval_data(cls, email: str) -> str:
        return f"{cls.APPROVAL_DATA_PREFIX}{email}"

    @classmethod
    def seeded(cls) -> tuple[str, ...]:
        """Keys initialised from fixtures and wiped by a full reset."""
        return (
            cls.EMPLOYEES,
            cls.SUBMISSIONS,
            cls.PENDING_REGISTRATIONS,
            cls.PROFILES,
            cls.ACCOUNTS,
            cls.NOTIFICATIONS,
        )


RUBRIC_WEIGHTS = {
    "job_knowledge": 0.20,
    "quality_of_work": 0.20,
    "adaptability": 0.10,
    "teamwork": 0.10,
    "reliability": 0.05,
    "ethical": 0.05,
    "customer_service": 0.30,
}

MIN_RATING = 0.0
MAX_RATING = 5.0

NEW_SUBMISSION_HOURS = 24
RECENT_SUBMISSION_HOURS = 48

FIRST_EMPLOYEE_ID = 1000
DEFAULT_SESSION_DAYS = 7

import sqlite3

DUPLICATE_BUDGET_MESSAGE = "A budget for this category already exists."
MISSING_CATEGORY_MESSAGE = "The selected category does not exist."
INVALID_DATA_MESSAGE = "Required information is missing or invalid."


def describe_integrity_error(exc: sqlite3.IntegrityError, action: str) -> str:
    """Map a constraint failure to a user-facing message.

    action is the verb phrase used in the fallback, e.g. 'add budget'.
    """
    text = str(exc)
    if "UNIQUE constraint failed: budgets.category_id" in text:
        return DUPLICATE_BUDGET_MESSAGE
    if "FOREIGN KEY constraint failed" in text:
        return MISSING_CATEGORY_MESSAGE
    if "NOT NULL constraint failed" in text or "CHECK constraint failed" in text:
        return f"Failed to {action}. {INVALID_DATA_MESSAGE}"
    return f"Failed to {action}."


def failure_message(action: str) -> str:
    return f"Failed to {action}."

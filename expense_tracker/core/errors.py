"""Domain errors raised by the services.

Every error carries a stable ``code`` for API clients and the HTTP status the
web layer answers with. Aggregators never raise these for missing data.
"""

from fastapi import status


class ExpenseTrackerError(ValueError):
    code = "business_error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = ""):
        super().__init__(message or self.code)
        self.message = message or self.code


class PeriodInvalid(ExpenseTrackerError):
    code = "period_invalid"


class CategoryNotFound(ExpenseTrackerError):
    code = "category_not_found"
    status_code = status.HTTP_404_NOT_FOUND


class CategoryNameInvalid(ExpenseTrackerError):
    code = "category_name_invalid"


class CategoryAttributeInvalid(ExpenseTrackerError):
    code = "category_attribute_invalid"


class CategoryNameDuplicate(ExpenseTrackerError):
    code = "category_name_duplicate"
    status_code = status.HTTP_409_CONFLICT


class CategoryLimitReached(ExpenseTrackerError):
    code = "category_limit_reached"


class CategoryPredefinedNotDeletable(ExpenseTrackerError):
    code = "category_predefined_not_deletable"


class CategoryDeleteRequiresSubstitute(ExpenseTrackerError):
    code = "category_delete_requires_substitute"


class CategoryNotPredefinedOrNotEdited(ExpenseTrackerError):
    code = "category_not_predefined_or_not_edited"


class ExpenseAmountInvalid(ExpenseTrackerError):
    code = "expense_amount_invalid"


class ExpenseDescriptionTooLong(ExpenseTrackerError):
    code = "expense_description_too_long"


class BudgetAmountInvalid(ExpenseTrackerError):
    code = "budget_amount_invalid"

"""
Ledger errors. Every failure the ledger engine reports is a LedgerError carrying
a human-readable detail, a machine code and the HTTP status the API layer uses
(see config.exceptions.custom_exception_handler).

- LedgerValidationError: bad input, raised before any state is read.
- LedgerConstraintError: raised after the locked read, before any write.
- LedgerNotFound: a referenced row does not exist.
- ConsistencyFailure: the transaction could not commit after retries.
"""
from rest_framework import status


class LedgerError(Exception):
    default_detail = "Talent ledger error."
    default_code = "ledger_error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail=None, code=None, **extra):
        self.detail = detail or self.default_detail
        self.code = code or self.default_code
        # Extra context rendered alongside detail/code (e.g. weeklyTotal, limit)
        self.extra = extra
        super().__init__(self.detail)


# Validation

class LedgerValidationError(LedgerError):
    default_detail = "Invalid input."
    default_code = "validation_error"


class MissingField(LedgerValidationError):
    default_code = "missing_field"


class InvalidDate(LedgerValidationError):
    default_detail = "Attendance can only be taken on Sundays or configured holidays."
    default_code = "invalid_date"


class InvalidStatus(LedgerValidationError):
    default_detail = "Invalid attendance status."
    default_code = "invalid_status"


class InvalidActivity(LedgerValidationError):
    default_detail = "Invalid activity type."
    default_code = "invalid_activity"


class InvalidAmount(LedgerValidationError):
    default_detail = "Invalid talent amount."
    default_code = "invalid_amount"


class InvalidQuantity(LedgerValidationError):
    default_detail = "Quantity must be at least 1."
    default_code = "invalid_quantity"


class InvalidEntityKind(LedgerValidationError):
    default_detail = "Entity kind must be 'student' or 'teacher'."
    default_code = "invalid_entity_kind"


# Constraints

class LedgerConstraintError(LedgerError):
    default_detail = "Request violates a ledger constraint."
    default_code = "constraint_error"


class CapExceeded(LedgerConstraintError):
    default_detail = "Weekly grant limit exceeded."
    default_code = "cap_exceeded"


class InsufficientTeacherBalance(LedgerConstraintError):
    default_detail = "Teacher does not have enough talents."
    default_code = "insufficient_teacher_balance"


class InsufficientBalance(LedgerConstraintError):
    default_detail = "Not enough talents."
    default_code = "insufficient_balance"


class InsufficientStock(LedgerConstraintError):
    default_detail = "Not enough stock."
    default_code = "insufficient_stock"


class ProductUnavailable(LedgerConstraintError):
    default_detail = "Product is not for sale."
    default_code = "product_unavailable"


class StudentNotAssigned(LedgerConstraintError):
    default_detail = "Teachers can only give talents to their own students."
    default_code = "not_assigned"
    status_code = status.HTTP_403_FORBIDDEN


# Not found

class LedgerNotFound(LedgerError):
    default_detail = "Not found."
    default_code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class StudentNotFound(LedgerNotFound):
    default_detail = "Student not found."
    default_code = "student_not_found"


class TeacherNotFound(LedgerNotFound):
    default_detail = "Teacher not found."
    default_code = "teacher_not_found"


class ProductNotFound(LedgerNotFound):
    default_detail = "Product not found."
    default_code = "product_not_found"


class AttendanceRecordNotFound(LedgerNotFound):
    default_detail = "Attendance record not found."
    default_code = "attendance_record_not_found"


# Transient

class ConsistencyFailure(LedgerError):
    default_detail = "The ledger is busy, please retry."
    default_code = "consistency_failure"
    status_code = status.HTTP_409_CONFLICT

"""
Admin manual adjustments: one signed amount applied to one or many students.
Each student is its own transaction; one failure never rolls back the others.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from django.db import DatabaseError

from talents.exceptions import InvalidAmount, LedgerError, MissingField
from talents.models import TalentHistory
from talents.services.ledger import apply_student_delta, ledger_transaction, lock_student

logger = logging.getLogger(__name__)

DEFAULT_REASON = "Manual adjustment"
DEFAULT_BULK_REASON = "Bulk manual adjustment"


@dataclass
class AdjustmentResult:
    student_id: int
    ok: bool
    before_balance: Optional[int] = None
    after_balance: Optional[int] = None
    detail: str = ""
    code: str = ""
    status_code: int = 200


def validate_amount(amount):
    """Signed, non-zero integer. bool is rejected even though it is an int subclass."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmount("Talent amount must be an integer.")
    if amount == 0:
        raise InvalidAmount("Talent amount must not be zero.")
    return amount


@ledger_transaction
def _adjust_one(student_id, amount, reason):
    student = lock_student(student_id)
    return apply_student_delta(student, amount, reason, TalentHistory.TYPE_MANUAL)


def adjust_talents(student_ids, amount, reason=None):
    """
    Apply `amount` to every student in `student_ids`, each from that student's own
    current balance. Returns one AdjustmentResult per requested id, in order.
    """
    if not student_ids:
        raise MissingField("At least one student id is required.")
    validate_amount(amount)
    reason = (reason or "").strip() or (DEFAULT_REASON if len(student_ids) == 1 else DEFAULT_BULK_REASON)

    results = []
    for student_id in student_ids:
        try:
            entry = _adjust_one(student_id, amount, reason)
        except LedgerError as exc:
            logger.warning(f"[adjust] Student {student_id} skipped: {exc.detail}")
            results.append(AdjustmentResult(
                student_id=student_id,
                ok=False,
                detail=exc.detail,
                code=exc.code,
                status_code=exc.status_code,
            ))
            continue
        except DatabaseError as exc:
            # Rolled back for this student only; the rest of the batch still runs
            logger.error(f"[adjust] Student {student_id} failed: {exc}")
            results.append(AdjustmentResult(
                student_id=student_id,
                ok=False,
                detail="Database error while adjusting talents.",
                code="database_error",
                status_code=500,
            ))
            continue
        results.append(AdjustmentResult(
            student_id=student_id,
            ok=True,
            before_balance=entry.before_balance,
            after_balance=entry.after_balance,
        ))

    applied = sum(1 for r in results if r.ok)
    logger.info(f"[adjust] {amount:+d} applied to {applied}/{len(results)} students ({reason!r})")
    return results

"""
Store purchase: one transaction moves stock, balance, history and the purchase row.
Lock order: student, then product (same as every other ledger path).
"""
import logging
from dataclasses import dataclass

from store.models import Product, Purchase
from talents.exceptions import (
    InsufficientBalance,
    InsufficientStock,
    InvalidQuantity,
    ProductNotFound,
    ProductUnavailable,
)
from talents.models import TalentHistory
from talents.services.ledger import apply_student_delta, ledger_transaction, lock_student

logger = logging.getLogger(__name__)


@dataclass
class PurchaseResult:
    purchase: Purchase
    remaining_talents: int


def _lock_product(product_id):
    try:
        return Product.objects.select_for_update().get(pk=product_id)
    except Product.DoesNotExist:
        raise ProductNotFound(f"Product {product_id} not found.")


@ledger_transaction
def _purchase(student_id, product_id, quantity, requirements):
    student = lock_student(student_id)
    product = _lock_product(product_id)

    if not product.is_available:
        raise ProductUnavailable(f"{product.name} is not for sale.")
    if product.stock < quantity:
        raise InsufficientStock(
            f"Not enough stock for {product.name} (left: {product.stock}, requested: {quantity}).",
            stock=product.stock,
            quantity=quantity,
        )
    total = product.price * quantity
    if student.talents < total:
        raise InsufficientBalance(
            f"Not enough talents (balance: {student.talents}, required: {total}).",
            balance=student.talents,
            required=total,
        )

    product.stock -= quantity
    product.save(update_fields=['stock', 'updated_at'])
    apply_student_delta(
        student,
        -total,
        f"Store purchase: {product.name} (x{quantity})",
        TalentHistory.TYPE_PURCHASE,
    )
    purchase = Purchase.objects.create(
        student=student,
        product=product,
        quantity=quantity,
        total_price=total,
        requirements=requirements,
        status=Purchase.STATUS_COMPLETED,
    )
    return PurchaseResult(purchase=purchase, remaining_talents=student.talents)


def purchase(student_id, product_id, quantity, requirements=""):
    """
    Buy `quantity` of a product with the student's talents.
    Rejected without any change when the product is unavailable, stock is short
    or the balance does not cover price * quantity.
    """
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidQuantity()
    result = _purchase(student_id, product_id, quantity, (requirements or "").strip())
    logger.info(
        f"[store] Student {student_id} bought product {product_id} x{quantity} "
        f"for {result.purchase.total_price}, balance now {result.remaining_talents}"
    )
    return result

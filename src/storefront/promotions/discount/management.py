"""Admin management of discount codes."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.promotions.discount.discount import BASIS_POINTS, DiscountCode, DiscountType
from storefront.promotions.discount.validation import find_discount_code
from storefront.shared.errors import ConflictError

logger = structlog.get_logger(__name__)


@storefront.command(part_of="DiscountCode")
class CreateDiscountCode:
    code = String(required=True, max_length=50)
    discount_type = String(required=True, max_length=20)
    value = Integer(required=True, min_value=1)  # whole percent (1-100) or pence
    max_uses = Integer(min_value=1)
    per_customer_limit = Integer(default=1, min_value=1)
    expires_at = DateTime()
    active = Boolean(default=True)


@storefront.command(part_of="DiscountCode")
class SetDiscountCodeActive:
    discount_code_id = Identifier(required=True)
    active = Boolean(required=True)


@storefront.command(part_of="DiscountCode")
class DeleteDiscountCode:
    discount_code_id = Identifier(required=True)


def get_discount_code(discount_code_id) -> DiscountCode:
    try:
        return current_domain.repository_for(DiscountCode).get(discount_code_id)
    except ObjectNotFoundError:
        raise ObjectNotFoundError("Discount code not found")


def stored_value(discount_type: str, value: int) -> int:
    """Admins enter percentages as whole numbers; storage is basis points."""
    if discount_type == DiscountType.PERCENTAGE.value:
        if not 1 <= value <= 100:
            raise ValidationError({"value": ["Percentage must be between 1 and 100"]})
        return value * (BASIS_POINTS // 100)
    return value


@storefront.command_handler(part_of=DiscountCode)
class ManageDiscountCodeHandler:
    @handle(CreateDiscountCode)
    def create_discount_code(self, command):
        if command.discount_type not in [t.value for t in DiscountType]:
            raise ValidationError({"discount_type": ["Type must be percentage or fixed"]})
        if find_discount_code(command.code) is not None:
            raise ConflictError({"code": ["A discount code with that code already exists"]})

        discount = DiscountCode.create(
            code=command.code,
            discount_type=command.discount_type,
            value=stored_value(command.discount_type, command.value),
            max_uses=command.max_uses,
            per_customer_limit=command.per_customer_limit,
            expires_at=command.expires_at,
            active=command.active,
        )
        current_domain.repository_for(DiscountCode).add(discount)
        logger.info("Discount code created", code=discount.code, discount_type=discount.discount_type)
        return str(discount.id)

    @handle(SetDiscountCodeActive)
    def set_active(self, command):
        discount = get_discount_code(command.discount_code_id)
        discount.set_active(command.active)
        current_domain.repository_for(DiscountCode).add(discount)
        logger.info("Discount code toggled", code=discount.code, active=discount.active)

    @handle(DeleteDiscountCode)
    def delete_discount_code(self, command):
        discount = get_discount_code(command.discount_code_id)
        current_domain.repository_for(DiscountCode)._dao.delete(discount)
        logger.info("Discount code deleted", code=discount.code)


def list_discount_codes() -> list[dict]:
    codes = current_domain.repository_for(DiscountCode)._dao.query.all().items
    return [
        {
            "id": str(d.id),
            "code": d.code,
            "type": d.discount_type,
            "value": d.value,
            "maxUses": d.max_uses,
            "usedCount": d.used_count,
            "perCustomerLimit": d.per_customer_limit,
            "expiresAt": d.expires_at.isoformat() if d.expires_at else None,
            "active": d.active,
            "createdAt": d.created_at.isoformat(),
        }
        for d in sorted(codes, key=lambda d: d.created_at, reverse=True)
    ]

"""New order alert for the shop owner."""

from storefront.shared.money import format_price


class OwnerNewOrderTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_number = context["order_number"]
        items = "\n".join(f"  {item['quantity']} x {item['title']}" for item in context.get("items", []))
        return {
            "subject": f"New order received: {order_number}",
            "body": (
                f"{context.get('customer_name') or 'A customer'} ({context.get('email')}) placed order {order_number}.\n\n"
                f"{items}\n\n"
                f"Total: {format_price(context.get('total', 0))}"
            ),
        }

"""Order confirmation: sent to the buyer when checkout completes."""

from storefront.shared.money import format_price


def _item_lines(items) -> str:
    return "\n".join(
        f"  {item['quantity']} x {item['title']} @ {format_price(item['unit_price'])} = {format_price(item['total'])}"
        for item in items
    )


class OrderConfirmationTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_number = context["order_number"]
        lines = [
            f"Hi {context.get('first_name') or 'there'},",
            "",
            f"Thanks for your order {order_number}!",
            "",
            _item_lines(context.get("items", [])),
            "",
            f"Subtotal: {format_price(context.get('subtotal', 0))}",
        ]
        if context.get("discount_amount"):
            lines.append(f"Discount: -{format_price(context['discount_amount'])}")
        lines += [
            f"Shipping: {format_price(context.get('shipping_cost', 0))}",
            f"Total: {format_price(context.get('total', 0))}",
        ]
        if context.get("recommendation_code"):
            lines += [
                "",
                f"Share your recommendation code {context['recommendation_code']} with a friend "
                "for their first order.",
            ]
        lines += ["", "We'll email you again once your order ships."]
        return {"subject": f"Order confirmed: {order_number}", "body": "\n".join(lines)}

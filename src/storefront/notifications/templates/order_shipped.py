class OrderShippedTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_number = context["order_number"]
        body = f"Good news! Your order {order_number} is on its way."
        if context.get("note"):
            body += f"\n\n{context['note']}"
        return {"subject": f"Your order {order_number} has shipped!", "body": body}

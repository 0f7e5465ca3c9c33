"""Storefront cart and the WhatsApp order hand-off."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Mapping, Optional
from urllib.parse import quote

from ..constants.products import MAX_ORDER_QUANTITY, PIX_KEY, WHATSAPP_API_URL
from ..errors import BadRequestError
from ..models import Product, ProductAvailability


class DeliveryMethod(str, Enum):
    DELIVERY = "delivery"
    HAND = "hand"


class CheckoutPayment(str, Enum):
    PIX = "pix"
    CASH = "cash"
    CARD = "card"


DELIVERY_LABELS = {
    DeliveryMethod.DELIVERY: "Entrega no endereço",
    DeliveryMethod.HAND: "Em mãos (eu mesmo levo)",
}

PAYMENT_LABELS = {
    CheckoutPayment.PIX: "PIX (adiantado)",
    CheckoutPayment.CASH: "Dinheiro na entrega",
    CheckoutPayment.CARD: "Cartão na entrega",
}


def format_price(value: float) -> str:
    """Format as Brazilian Real, e.g. ``R$ 1.234,56``."""

    text = f"{abs(value):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    sign = "-" if value < 0 else ""
    return f"{sign}R$ {text}"


def format_timestamp(moment: datetime) -> str:
    return moment.strftime("%d/%m/%Y, %H:%M:%S")


@dataclass
class CartItem:
    id: str
    name: str
    price: float
    quantity: int
    image: str = ""

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity


@dataclass
class Cart:
    items: list[CartItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Cart":
        """Build a cart from untrusted input, dropping lines without id or quantity.

        Raises `BadRequestError` when a line asks for more than `MAX_ORDER_QUANTITY` units.
        """

        if not isinstance(data, Mapping):
            return cls()
        raw_items = data.get("items")
        if not isinstance(raw_items, list):
            return cls()
        items: list[CartItem] = []
        for raw in raw_items:
            if not isinstance(raw, Mapping):
                continue
            try:
                item = CartItem(
                    id=str(raw.get("id") or ""),
                    name=str(raw.get("name") or ""),
                    price=float(raw.get("price") or 0),
                    quantity=int(raw.get("quantity") or 0),
                    image=str(raw.get("image") or ""),
                )
            except (TypeError, ValueError, OverflowError):
                continue
            if item.quantity > MAX_ORDER_QUANTITY:
                raise BadRequestError(f"Quantidade máxima por sabor: {MAX_ORDER_QUANTITY} unidades.")
            if item.id and item.quantity > 0:
                items.append(item)
        return cls(items=items)

    def _find(self, product_id: str) -> Optional[CartItem]:
        return next((item for item in self.items if item.id == product_id), None)

    def add_item(self, product_id: str, name: str, price: float, image: str = "", quantity: int = 1) -> None:
        existing = self._find(product_id)
        if existing is not None:
            existing.quantity += quantity
        else:
            self.items.append(CartItem(id=product_id, name=name, price=price, quantity=quantity, image=image))

    def remove_item(self, product_id: str) -> None:
        self.items = [item for item in self.items if item.id != product_id]

    def update_quantity(self, product_id: str, quantity: int) -> None:
        if quantity <= 0:
            self.remove_item(product_id)
            return
        existing = self._find(product_id)
        if existing is not None:
            existing.quantity = quantity

    def clear(self) -> None:
        self.items = []

    @property
    def total(self) -> float:
        return sum((item.subtotal for item in self.items), 0.0)

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    def repriced(self, products: Iterable[Product]) -> "Cart":
        """Return a copy priced from the live catalog; unknown or unorderable products are rejected."""

        by_id = {p.id: p for p in products}
        items: list[CartItem] = []
        for item in self.items:
            product = by_id.get(item.id)
            if product is None:
                raise BadRequestError(f"Produto desconhecido: {item.id}.")
            if product.availability != ProductAvailability.AVAILABLE:
                raise BadRequestError(f"{product.name} não está disponível para pedido imediato.")
            items.append(
                CartItem(id=product.id, name=product.name, price=product.price, quantity=item.quantity, image=product.image)
            )
        return Cart(items=items)


@dataclass
class OrderDetails:
    cart: Cart
    customer_name: str
    customer_phone: str
    delivery_method: DeliveryMethod = DeliveryMethod.DELIVERY
    payment_method: CheckoutPayment = CheckoutPayment.PIX
    customer_address: str = ""
    delivery_date: Optional[str] = None
    notes: Optional[str] = None

    def validate(self) -> None:
        if not self.cart.items:
            raise BadRequestError("O carrinho está vazio.")
        if not self.customer_name.strip() or not self.customer_phone.strip():
            raise BadRequestError("Informe nome e telefone.")
        if self.delivery_method == DeliveryMethod.DELIVERY and not self.customer_address.strip():
            raise BadRequestError("Informe o endereço de entrega.")


def generate_order_message(order: OrderDetails, now: datetime, *, pix_key: str = PIX_KEY) -> str:
    address = order.customer_address.strip()
    if not address:
        address_line = ""
    elif order.delivery_method == DeliveryMethod.DELIVERY:
        address_line = f"Endereço: {address}"
    else:
        address_line = f"Local/Referência: {address}"

    lines = [
        "🍽️ *NOVO PEDIDO - EMPADAS DA LIA*",
        "",
        "📋 *ITENS:*",
        *(f"• {item.name} — {item.quantity}x ({format_price(item.price)})" for item in order.cart.items),
        "",
        f"💰 *TOTAL: {format_price(order.cart.total)}*",
        "",
        "🚚 *ENTREGA:*",
        DELIVERY_LABELS[order.delivery_method],
    ]
    if address_line:
        lines.append(address_line)
    if order.delivery_date:
        lines.append(f"Data de entrega: {order.delivery_date}")
    lines += ["", "💳 *PAGAMENTO:*", PAYMENT_LABELS[order.payment_method]]
    if order.payment_method == CheckoutPayment.PIX and pix_key:
        lines.append(f"Chave PIX: {pix_key}")
    lines += [
        "",
        "👤 *CLIENTE:*",
        f"Nome: {order.customer_name.strip()}",
        f"Telefone: {order.customer_phone.strip()}",
    ]
    if order.notes and order.notes.strip():
        lines.append(f"Observações: {order.notes.strip()}")
    lines += ["", f"Pedido realizado em: {format_timestamp(now)}"]
    return "\n".join(lines)


def on_demand_request_message(product_name: str, quantity: int, now: datetime) -> str:
    return "\n".join(
        [
            "📦 *SOLICITAÇÃO SOB DEMANDA - EMPADAS DA LIA*",
            "",
            f"Sabor: {product_name}",
            f"Quantidade: {quantity} unidade(s)",
            "",
            "Pode me confirmar disponibilidade e prazo?",
            "",
            f"Solicitado em: {format_timestamp(now)}",
        ]
    )


def whatsapp_url(message: str, *, base_url: str = WHATSAPP_API_URL) -> str:
    return f"{base_url}?text={quote(message, safe='')}"

"""Order validation, identity and the append-only order log."""
import logging
import math
import random
import re
import time
from dataclasses import dataclass
from datetime import datetime
from numbers import Real
from typing import NamedTuple

logger = logging.getLogger(__name__)


class Product(NamedTuple):
    min_quantity: int
    display_name: str


PRODUCTS = {
    "fish_feed": Product(10, "Fish Feed"),
    "catfish": Product(1, "Catfish"),
    "materials": Product(50, "Materials"),
}

REQUIRED_FIELDS = ("name", "address", "phone", "product")
ORDER_PREFIX = "FP"

_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_SURROGATES = re.compile(r"[\ud800-\udfff]")


class OrderRejected(Exception):
    """Raised when a submission fails validation; ``message`` goes back to the client."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


@dataclass
class Order:
    order_number: str
    order_date: str
    name: str
    address: str
    phone: str
    product: str
    quantity: float
    notes: str = ""

    @property
    def product_name(self) -> str:
        return PRODUCTS[self.product].display_name

    @property
    def notes_text(self) -> str:
        return self.notes or "None"

    @property
    def quantity_text(self) -> str:
        return format_quantity(self.quantity)


def parse_quantity(value) -> float:
    """Parse like a browser's parseFloat: leading numeric prefix, else NaN."""
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, Real):
        return float(value)
    if not isinstance(value, str):
        return math.nan
    match = _FLOAT_PREFIX.match(value)
    if not match:
        return math.nan
    return float(match.group(0))


def format_quantity(quantity: float) -> str:
    if float(quantity).is_integer():
        return str(int(quantity))
    return repr(float(quantity))


def new_order_number() -> str:
    millis = time.time_ns() // 1_000_000
    return f"{ORDER_PREFIX}{millis}{random.randint(0, 999)}"


def order_timestamp() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def validate_order(payload) -> Order:
    """Check a submitted payload and stamp it with an order number and date.

    Checks run in a fixed order (required fields, product, quantity) and the
    first failure raises :class:`OrderRejected`.
    """
    if not all(payload.get(field) for field in REQUIRED_FIELDS):
        raise OrderRejected("All required fields must be filled")

    product = payload["product"]
    if not isinstance(product, str) or product not in PRODUCTS:
        raise OrderRejected("Invalid product selected")

    info = PRODUCTS[product]
    quantity = parse_quantity(payload.get("quantity"))
    if not math.isfinite(quantity) or quantity < info.min_quantity:
        raise OrderRejected(
            f"Quantity does not meet minimum requirement for "
            f"{info.display_name} (Min: {info.min_quantity}kg)"
        )

    return Order(
        order_number=new_order_number(),
        order_date=order_timestamp(),
        name=payload["name"],
        address=payload["address"],
        phone=payload["phone"],
        product=product,
        quantity=quantity,
        notes=payload.get("notes") or "",
    )


def format_order_line(order: Order) -> str:
    return (
        f"Order #{order.order_number} | Date: {order.order_date} | "
        f"Name: {order.name} | Phone: {order.phone} | "
        f"Address: {order.address} | Product: {order.product_name} | "
        f"Quantity: {order.quantity_text}kg | Notes: {order.notes_text}\n"
    )


class OrderLog:
    """Append-only text file, one line per accepted order.

    Each line goes out in a single write on a file opened for append; there is
    no locking between concurrent requests.
    """

    def __init__(self, path):
        self.path = path

    def append(self, order: Order) -> None:
        # lone surrogates from JSON escapes cannot be encoded; store U+FFFD
        line = _SURROGATES.sub("\ufffd", format_order_line(order))
        with open(self.path, "a", encoding="utf-8") as fh:
            fh.write(line)
        logger.info("Order %s saved to %s", order.order_number, self.path)

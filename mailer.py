"""Best-effort order notification by email.

A notifier's result never changes the response to the customer: every
outcome is logged and ``notify`` returns a bool instead of raising.
"""
import logging
import smtplib
import ssl
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from email.message import EmailMessage
from email.utils import formataddr
from html import escape

logger = logging.getLogger(__name__)

SOCKET_TIMEOUT = 10
SENDER_NAME = "Fish Parque Orders"

_BODY = """\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
    <h2 style="color: #667eea;">🐟 New Order Received - Fish Parque</h2>
    <p><strong>Order Number:</strong> {order_number}</p>
    <p><strong>Date:</strong> {order_date}</p>
    <hr style="border: 1px solid #e0e0e0;">

    <h3 style="color: #667eea;">Customer Information</h3>
    <p><strong>Name:</strong> {name}</p>
    <p><strong>Phone:</strong> {phone}</p>
    <p><strong>Address:</strong> {address}</p>
    <hr style="border: 1px solid #e0e0e0;">

    <h3 style="color: #667eea;">Order Details</h3>
    <p><strong>Product:</strong> {product}</p>
    <p><strong>Quantity:</strong> {quantity}kg</p>
    <p><strong>Notes:</strong> {notes}</p>
    <hr style="border: 1px solid #e0e0e0;">

    <p style="color: #666; font-size: 0.9em;">✅ Order saved successfully to server database.</p>
</div>
"""


class Notifier:
    def notify(self, order) -> bool:
        raise NotImplementedError


class DisabledNotifier(Notifier):
    def notify(self, order) -> bool:
        logger.warning(
            "Email not configured. Order %s saved to order log only.", order.order_number
        )
        return False


def render_order_html(order) -> str:
    return _BODY.format(
        order_number=escape(order.order_number),
        order_date=escape(order.order_date),
        name=escape(str(order.name)),
        phone=escape(str(order.phone)),
        address=escape(str(order.address)),
        product=escape(order.product_name),
        quantity=order.quantity_text,
        notes=escape(str(order.notes_text)),
    )


class SmtpNotifier(Notifier):
    """Send over SMTP with STARTTLS, waiting at most ``timeout`` seconds."""

    def __init__(self, mail, timeout=15.0, executor=None):
        self.mail = mail
        self.timeout = timeout
        self.executor = executor or ThreadPoolExecutor(
            max_workers=4, thread_name_prefix="mailer"
        )

    def build_message(self, order) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = f"🐟 New Fish Parque Order - {order.order_number}"
        msg["From"] = formataddr((SENDER_NAME, self.mail.user))
        msg["To"] = self.mail.recipient
        msg.set_content(
            f"New order {order.order_number} received. View this message as HTML."
        )
        msg.add_alternative(render_order_html(order), subtype="html")
        return msg

    def send(self, msg: EmailMessage) -> None:
        with smtplib.SMTP(self.mail.host, self.mail.port, timeout=SOCKET_TIMEOUT) as server:
            server.starttls(context=ssl.create_default_context())
            server.login(self.mail.user, self.mail.password)
            server.send_message(msg)

    def notify(self, order) -> bool:
        try:
            future = self.executor.submit(self.send, self.build_message(order))
            # the worker keeps running on timeout; its result is just not awaited
            future.result(timeout=self.timeout)
        except FutureTimeout:
            logger.error(
                "Email timeout after %ss for order %s; order is still saved",
                self.timeout, order.order_number,
            )
            return False
        except Exception as exc:
            logger.error(
                "Email failed for order %s: %s; order is still saved",
                order.order_number, exc,
            )
            return False
        logger.info("Email sent successfully for order %s", order.order_number)
        return True


def build_notifier(settings) -> Notifier:
    if settings.mail is None:
        return DisabledNotifier()
    return SmtpNotifier(settings.mail, timeout=settings.mail_timeout)

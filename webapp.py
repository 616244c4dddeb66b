import logging

from flask import Flask, request, jsonify, send_from_directory
from flask_cors import CORS

from mailer import build_notifier
from orders import OrderLog, OrderRejected, validate_order

logger = logging.getLogger(__name__)

SAVE_FAILED = "Unable to save order. Please try again."
GENERIC_ERROR = "An error occurred. Please try again."
THANK_YOU = ("Thank you! Your order #{} has been placed successfully. "
             "We will contact you shortly.")


def _result(success, message):
    # errors are reported in the body; the status is always 200
    return jsonify({"success": success, "message": message}), 200


def _order_payload():
    data = request.get_json(silent=True)
    if data is None and request.form:
        data = request.form
    if not hasattr(data, "get"):
        return {}
    return data


# ─── App factory ─────────────────────────────────────────────────────────
def create_app(settings, notifier=None, order_log=None):
    app = Flask(__name__)
    CORS(app)  # form may be hosted on a different origin

    notifier = notifier or build_notifier(settings)
    order_log = order_log or OrderLog(settings.orders_file)

    # ─── GET / ───────────────────────────────────────────────────────────
    @app.route("/")
    def index():
        return send_from_directory(app.static_folder, "index.html")

    # ─── Health check ────────────────────────────────────────────────────
    @app.route("/api/health")
    def health():
        return jsonify({"status": "ok", "message": "Fish Parque API is running"}), 200

    # ─── POST /api/order ─────────────────────────────────────────────────
    @app.route("/api/order", methods=["POST"])
    def place_order():
        try:
            order = validate_order(_order_payload())

            try:
                order_log.append(order)
            except OSError:
                logger.exception("File write error for order %s", order.order_number)
                return _result(False, SAVE_FAILED)

            notifier.notify(order)
            return _result(True, THANK_YOU.format(order.order_number))

        except OrderRejected as exc:
            logger.info("Order rejected: %s", exc.message)
            return _result(False, exc.message)
        except Exception:
            logger.exception("Server error while placing order")
            return _result(False, GENERIC_ERROR)

    return app

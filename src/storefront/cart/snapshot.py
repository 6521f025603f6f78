"""JSON snapshot codec for a cart's line items.

The persisted form is a bare JSON array of line objects, keyed the way the
storefront's browser client stores them::

    [{"id": "margherita-Large", "menuItemId": "margherita", "name": "Margherita",
      "price": "₹359", "basePrice": "399", "category": "Pizza",
      "variant": "Large", "quantity": 2}]

There is no version field. Anything that does not have exactly this shape is
unreadable, and an unreadable snapshot stands for an empty cart.
"""

import json

_REQUIRED_KEYS = ("id", "menuItemId", "name", "price", "quantity")
_OPTIONAL_TEXT_KEYS = ("basePrice", "category", "variant")


class SnapshotError(ValueError):
    """Raised when persisted cart data cannot be read back into lines."""


def encode_lines(lines) -> str:
    """Serialize ``Cart.line_snapshot()`` output to the persisted JSON array."""
    payload = []
    for line in lines:
        entry = {
            "id": line["line_id"],
            "menuItemId": line["menu_item_id"],
            "name": line["name"],
            "price": line["price"],
            "basePrice": line["base_price"],
            "category": line["category"],
        }
        if line.get("variant"):
            entry["variant"] = line["variant"]
        entry["quantity"] = line["quantity"]
        payload.append(entry)
    return json.dumps(payload, ensure_ascii=False)


def _text(value, key):
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise SnapshotError(f"{key} must be text or a number")
    return str(value)


def _decode_line(entry):
    if not isinstance(entry, dict):
        raise SnapshotError("cart lines must be objects")

    missing = [key for key in _REQUIRED_KEYS if key not in entry]
    if missing:
        raise SnapshotError(f"cart line is missing {', '.join(missing)}")

    quantity = entry["quantity"]
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise SnapshotError("quantity must be a positive integer")

    line = {
        "line_id": _text(entry["id"], "id"),
        "menu_item_id": _text(entry["menuItemId"], "menuItemId"),
        "name": _text(entry["name"], "name"),
        "price": _text(entry["price"], "price"),
        "quantity": quantity,
    }
    for key, field in zip(_OPTIONAL_TEXT_KEYS, ("base_price", "category", "variant"), strict=True):
        value = entry.get(key)
        line[field] = _text(value, key) if value not in (None, "") else None
    return line


def decode_lines(raw) -> list[dict]:
    """Parse a persisted snapshot into line dicts accepted by ``Cart.restore``.

    Raises:
        SnapshotError: the data is not valid JSON or not the expected shape.
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SnapshotError("snapshot is not UTF-8") from exc

    try:
        payload = json.loads(raw)
    except (TypeError, ValueError, RecursionError) as exc:
        raise SnapshotError("snapshot is not valid JSON") from exc

    if not isinstance(payload, list):
        raise SnapshotError("snapshot must be a JSON array")

    lines = [_decode_line(entry) for entry in payload]

    line_ids = [line["line_id"] for line in lines]
    if len(set(line_ids)) != len(line_ids):
        raise SnapshotError("snapshot repeats a cart line")
    return lines

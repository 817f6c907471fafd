from __future__ import annotations

import re
from typing import Optional

from .models import QRMapping, Vehicle

_PATH_SLOT = re.compile(r"/(?:slot|vehicle|qr)[/\-]?(\d+)", re.IGNORECASE)
_PREFIX_SLOT = re.compile(r"(?:slot|qr|araç|arac)[\-_\s]?(\d+)", re.IGNORECASE)
_ANY_NUMBER = re.compile(r"(\d+)")


def extract_slot_number(content: str) -> Optional[str]:
    """
    Pull a slot number out of whatever the sticker encodes.

    Accepts "7", ".../slot/7", ".../vehicle-7", "SLOT-7", "QR_7", "ARAÇ 7",
    and as a last resort the first run of digits anywhere in the text.
    """
    text = (content or "").strip()
    if not text:
        return None
    if text.isdigit():
        return text

    for pattern in (_PATH_SLOT, _PREFIX_SLOT, _ANY_NUMBER):
        m = pattern.search(text)
        if m:
            return m.group(1)
    return None


def _vehicle_for_code(code: str) -> Optional[Vehicle]:
    return Vehicle.objects.filter(qr_code=code).order_by("-created_at").first()


def resolve_scanned_code(content: str) -> Optional[Vehicle]:
    """
    Vehicle parked in the slot a scanned QR code points to, or None.

    Lookup order: exact qr_code match, registered sticker content, then a
    slot number parsed out of the text.
    """
    code = (content or "").strip()
    if not code:
        return None

    vehicle = _vehicle_for_code(code)
    if vehicle:
        return vehicle

    mapping = QRMapping.objects.filter(qr_content=code).first()
    if mapping:
        vehicle = _vehicle_for_code(str(mapping.slot_number))
        if vehicle:
            return vehicle

    slot = extract_slot_number(code)
    if slot and slot != code:
        return _vehicle_for_code(slot)
    return None

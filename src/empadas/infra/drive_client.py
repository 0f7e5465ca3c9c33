"""Google Drive v3 client construction from service-account credentials."""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any, Optional

from google.oauth2 import service_account
from googleapiclient.discovery import build

from ..config import BaseConfig

SERVICE_ACCOUNT_ENV = "GOOGLE_SERVICE_ACCOUNT_JSON_BASE64"


class ServiceAccountError(ValueError):
    """Raised when the service-account variable is absent or cannot be decoded."""


def _decode_json_text(raw: bytes) -> str:
    """Decode base64 payload bytes that may be UTF-8 or UTF-16 (with or without BOM)."""

    if raw.startswith(b"\xff\xfe"):
        text = raw[2:].decode("utf-16-le")
    elif raw.startswith(b"\xfe\xff"):
        text = raw[2:].decode("utf-16-be")
    elif b"\x00" in raw:
        # Windows shells often base64-encode UTF-16LE without a BOM.
        text = raw.decode("utf-16-le")
    else:
        text = raw.decode("utf-8")
    return text.lstrip("\ufeff").strip()


def decode_service_account(value: str) -> dict[str, Any]:
    """Parse the service-account variable: base64 JSON, or plain JSON pasted as-is."""

    # Base64 never starts with `=`; tolerate `KEY==<value>` typos.
    raw = value.strip().lstrip("=")
    if raw.startswith("{"):
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise ServiceAccountError(
                f"Invalid {SERVICE_ACCOUNT_ENV}: looks like JSON but could not parse."
            ) from exc

    normalized = "".join(raw.split())
    try:
        decoded = _decode_json_text(base64.b64decode(normalized))
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise ServiceAccountError(f"Invalid {SERVICE_ACCOUNT_ENV}: not valid base64 text.") from exc

    if not decoded.startswith("{"):
        raise ServiceAccountError(
            f"Invalid {SERVICE_ACCOUNT_ENV} (decoded value is not JSON). "
            "Confirme que o valor está completo (uma única linha) e realmente em base64."
        )
    try:
        return json.loads(decoded)
    except ValueError as exc:
        raise ServiceAccountError(
            f"Invalid {SERVICE_ACCOUNT_ENV} (decoded JSON is malformed). "
            "Confirme que a string base64 não foi cortada ao colar no `.env.local`."
        ) from exc


def load_service_account_info(config: BaseConfig) -> dict[str, Any]:
    value = config.GOOGLE_SERVICE_ACCOUNT_JSON_BASE64
    if not value:
        raise ServiceAccountError(f"Missing env {SERVICE_ACCOUNT_ENV}")
    return decode_service_account(value)


def service_account_email(config: BaseConfig) -> Optional[str]:
    """Return the configured service-account email, or None when unavailable."""

    try:
        info = load_service_account_info(config)
    except ServiceAccountError:
        return None
    email = info.get("client_email")
    return email if isinstance(email, str) else None


def build_drive_service(config: BaseConfig):
    """Create an authorised Drive v3 resource for the configured service account."""

    credentials = service_account.Credentials.from_service_account_info(
        load_service_account_info(config),
        scopes=list(config.DRIVE_SCOPES),
    )
    return build("drive", "v3", credentials=credentials, cache_discovery=False)

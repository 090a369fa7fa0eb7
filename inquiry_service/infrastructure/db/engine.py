from __future__ import annotations

import re

from inquiry_service.infrastructure.config import DATABASE_URL

__all__ = ["DATABASE_URL", "_mask_password"]


def _mask_password(url: str) -> str:
    return re.sub(r"://([^:/@]+):(.+)@", r"://\1:***@", url)

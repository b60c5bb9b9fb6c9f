"""
Human-readable document numbers.

Format: <PREFIX>-<UTC yyyymmddHHMMSS>-<10 upper-case hex chars of a uuid4>

The timestamp keeps numbers sortable and readable at the counter; the uuid
part makes two numbers generated in the same second distinct. The columns
holding these numbers also carry a unique constraint.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

JOB_PREFIX = "JOB"
RECEIPT_PREFIX = "RCP"
SALE_PREFIX = "SALE"

_SUFFIX_LENGTH = 10


def generate_number(prefix: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    suffix = uuid.uuid4().hex[:_SUFFIX_LENGTH].upper()
    return f"{prefix}-{now:%Y%m%d%H%M%S}-{suffix}"


def generate_job_number(now: Optional[datetime] = None) -> str:
    return generate_number(JOB_PREFIX, now)


def generate_receipt_number(now: Optional[datetime] = None) -> str:
    return generate_number(RECEIPT_PREFIX, now)


def generate_sale_number(now: Optional[datetime] = None) -> str:
    return generate_number(SALE_PREFIX, now)

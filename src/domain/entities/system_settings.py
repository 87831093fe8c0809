"""System-wide settings entity."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class SystemSettings:
    """Shop-level feature switches, stored as a single row."""

    credit_sales_enabled: bool
    updated_at: datetime = field(default_factory=datetime.utcnow)

"""
Order number generation.

Default ``YYYY-NNNNNN`` numbers derived from the clock. Two orders created
in the same second (or a multiple of 10^6 seconds apart) collide, so
production code asks the order repository for a unique number instead.
"""

import re

from erp_core.core.shared.clock import Clock, system_clock

ORDER_NUMBER_PATTERN = re.compile(r"^\d{4}-\d{6}$")


def generate_order_number(clock: Clock | None = None) -> str:
    now = (clock or system_clock()).now()
    sequence = int(now.timestamp()) % 1_000_000
    return f"{now.year:04d}-{sequence:06d}"


def is_valid_order_number(order_number: str) -> bool:
    return ORDER_NUMBER_PATTERN.match(order_number.strip()) is not None

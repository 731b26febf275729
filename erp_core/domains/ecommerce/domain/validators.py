"""
Catalog invariant predicates

Pricing, physical, inventory, tax and digital-delivery rules shared by
Product and ProductVariant. Each function appends messages to the given
FieldValidator; the validator's prefix ("variant ") distinguishes the
owning entity in the messages.
"""

from decimal import Decimal

from erp_core.core.domain import Money
from erp_core.core.shared.validators import (
    CODE_PATTERN,
    DIMENSIONS_PATTERN,
    HTTP_URL_PATTERN,
    FieldValidator,
    has_image_extension,
    is_http_url,
)

MAX_PRICE = Decimal("999999.99")
MAX_WEIGHT = 999999.99
MAX_DIMENSION = 99999
MAX_STOCK = 999999
MAX_DOWNLOADS = 9999
MAX_EXPIRY_DAYS = 3650


def check_sku(v: FieldValidator, sku: str) -> None:
    v.required_text(
        sku.strip() if sku else sku,
        100,
        "SKU",
        CODE_PATTERN,
        f"{v.prefix}SKU can only contain letters, numbers, hyphens, and underscores",
    )


def check_barcode(v: FieldValidator, barcode: str | None) -> None:
    v.optional_text(
        barcode,
        50,
        "barcode",
        CODE_PATTERN,
        f"{v.prefix}barcode can only contain letters, numbers, hyphens, and underscores",
    )


def check_pricing(v: FieldValidator, price: Money, cost: Money) -> None:
    """price in (0, 999999.99]; cost in [0, 999999.99] and not above price."""
    if v.positive(price, "price"):
        v.at_most(price, MAX_PRICE, "price")
    if v.bounded(cost, MAX_PRICE, "cost"):
        v.check(cost <= price, f"{v.prefix}cost cannot be higher than price")


def check_physical(
    v: FieldValidator,
    weight: float,
    dimensions: str | None,
    length: float = 0.0,
    width: float = 0.0,
    height: float = 0.0,
    volume: float = 0.0,
) -> None:
    v.bounded(weight, MAX_WEIGHT, "weight")
    for name, value in (("length", length), ("width", width), ("height", height)):
        v.bounded(value, MAX_DIMENSION, name)
    v.non_negative(volume, "volume")
    if dimensions:
        v.check(
            DIMENSIONS_PATTERN.match(dimensions) is not None,
            f"{v.prefix}dimensions must be in format 'L x W x H' or 'LxWxH'",
        )


def check_inventory(v: FieldValidator, stock_quantity: int, min_stock_level: int, max_stock_level: int) -> None:
    v.bounded(stock_quantity, MAX_STOCK, "stock quantity")
    v.bounded(min_stock_level, MAX_STOCK, "minimum stock level")
    v.bounded(max_stock_level, MAX_STOCK, "maximum stock level")
    if min_stock_level > 0 and max_stock_level > 0:
        v.check(
            max_stock_level >= min_stock_level,
            f"{v.prefix}maximum stock level cannot be less than minimum stock level",
        )


def check_tax(v: FieldValidator, taxable: bool, tax_rate: Decimal) -> None:
    if taxable:
        if v.non_negative(tax_rate, "tax rate"):
            v.check(tax_rate <= 100, f"{v.prefix}tax rate cannot exceed 100%")
    else:
        v.check(tax_rate == 0, f"{v.prefix}tax rate must be 0 for non-taxable items")


def check_digital(
    v: FieldValidator,
    is_digital: bool,
    requires_shipping: bool,
    download_url: str | None,
    max_downloads: int,
    expiry_days: int,
) -> None:
    """
    Digital items need a download URL and no shipping; physical items carry
    no download settings at all.
    """
    if is_digital:
        v.check(not requires_shipping, f"{v.prefix}digital items cannot require shipping")
        if v.check(bool(download_url), f"{v.prefix}digital items must have a download URL"):
            v.optional_text(
                download_url,
                1000,
                "download URL",
                HTTP_URL_PATTERN,
                f"{v.prefix}download URL has an invalid format",
            )
        v.bounded(max_downloads, MAX_DOWNLOADS, "maximum downloads")
        v.bounded(expiry_days, MAX_EXPIRY_DAYS, "expiry days")
    else:
        v.check(not download_url, f"{v.prefix}physical items cannot have download URLs")
        v.check(max_downloads == 0, f"{v.prefix}physical items cannot have maximum downloads limit")
        v.check(expiry_days == 0, f"{v.prefix}physical items cannot have expiry days")


def check_stock_level(v: FieldValidator, quantity: int) -> None:
    """Single stock value as accepted by update_stock / adjust_stock."""
    v.bounded(quantity, MAX_STOCK, "stock quantity")


def check_image_url(v: FieldValidator, image_url: str | None, max_len: int) -> None:
    """Optional http(s) URL that must point at an image file."""
    if not image_url:
        return
    url = image_url.strip()
    if not v.max_length(url, max_len, "image URL"):
        return
    if not v.check(is_http_url(url), f"invalid {v.prefix}image URL format"):
        return
    v.check(
        has_image_extension(url),
        f"{v.prefix}image URL must end with a valid image extension (.jpg, .jpeg, .png, .gif, .webp, .svg)",
    )

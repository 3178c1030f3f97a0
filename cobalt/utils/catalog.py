import re

CATALOG_FIELDS = ("id", "name", "description", "image_url", "category", "is_active")
CONFIG_OPTION_FIELDS = ("id", "type", "value", "label", "is_active")

# "location" is the older name for reception options
RECEPTION_TYPES = ("reception", "location")


def catalog_dict(row) -> dict:
    return {field: getattr(row, field) for field in CATALOG_FIELDS}


def config_option_dict(row) -> dict:
    return {field: getattr(row, field) for field in CONFIG_OPTION_FIELDS}


def slugify(label: str) -> str:
    """Derives a config option value from its label, e.g. "Boiler Water" -> "boiler_water".

    Labels with no ASCII letters or digits (most Korean labels) keep the label itself.
    """
    slug = re.sub(r"\s+", "_", label.strip().lower())
    slug = re.sub(r"[^a-z0-9_]", "", slug)
    return slug or label.strip()

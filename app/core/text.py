"""Text helpers."""
import re
import unicodedata


def generate_slug(value: str) -> str:
    """Build a URL-safe slug: "Lomo Saltado Clásico" -> "lomo-saltado-clasico"."""
    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    normalized = re.sub(r"[^a-zA-Z0-9\s-]", "", normalized).strip().lower()
    return re.sub(r"[\s_-]+", "-", normalized).strip("-")

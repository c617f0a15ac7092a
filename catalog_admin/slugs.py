import re

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

_NON_SLUG_RUN = re.compile(r"[^a-z0-9]+")


def slugify_name(value):
    """
    Lowercase, trim, collapse every run of characters outside [a-z0-9]
    into one hyphen and strip hyphens from both ends.

        slugify_name("  Smart Cameras ")  -> "smart-cameras"
        slugify_name("Wi-Fi / Routers")   -> "wi-fi-routers"
        slugify_name("!!!")               -> ""
    """
    text = (value or "").lower().strip()
    return _NON_SLUG_RUN.sub("-", text).strip("-")


def is_valid_slug(value):
    return bool(value) and bool(SLUG_PATTERN.match(value))


def derive_slug(name, slug, previous=None):
    """
    Slug a row should be saved with.

    `previous` is the (name, slug) pair as stored, or None for a new row.
    The slug is regenerated from the name when it is empty, or when the name
    changed and the slug was left as stored. A slug set by the caller wins
    but is normalized.
    """
    if previous is None or not slug:
        return slugify_name(slug or name)
    previous_name, previous_slug = previous
    if name != previous_name and slug == previous_slug:
        return slugify_name(name)
    return slugify_name(slug)


def apply_slug(instance, source_field="name"):
    """Set instance.slug right before the row is written."""
    loaded = getattr(instance, "_loaded_values", None)
    previous = None
    if loaded and not instance._state.adding:
        previous = (loaded.get(source_field), loaded.get("slug"))
    instance.slug = derive_slug(getattr(instance, source_field), instance.slug, previous)
    return instance.slug

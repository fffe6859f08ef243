from datetime import date, datetime

from dateutil.parser import parse

from store_cms.domain.exceptions import ValidationError

THEME_WINDOW_FIELDS = ("custom_theme_from", "custom_theme_to")


def normalize_theme_date(value):
    """
    Convert a theme window boundary to a ``date``.
    Empty input becomes None so the column stays NULL.
    """
    if not value:
        return None

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    try:
        return parse(str(value)).date()
    except (ValueError, OverflowError) as exc:
        raise ValidationError(f"Invalid date value: {value!r}", rule="date") from exc


def normalize_theme_window(page):
    for field in THEME_WINDOW_FIELDS:
        setattr(page, field, normalize_theme_date(getattr(page, field)))


def _iso(value):
    return value.isoformat() if value else None


def normalize_page(page, store_ids=None):
    data = {
        "id": page.id,
        "identifier": page.identifier,
        "title": page.title,
        "content_heading": page.content_heading,
        "content": page.content,
        "page_layout": page.page_layout,
        "meta_title": page.meta_title,
        "meta_keywords": page.meta_keywords,
        "meta_description": page.meta_description,
        "is_active": page.is_active,
        "sort_order": page.sort_order,
        "custom_theme": page.custom_theme,
        "custom_root_template": page.custom_root_template,
        "custom_theme_from": _iso(page.custom_theme_from),
        "custom_theme_to": _iso(page.custom_theme_to),
        "row_id": page.row_id,
    }

    if store_ids is None:
        store_ids = page.store_ids
    data["store_ids"] = sorted(store_ids)

    return data

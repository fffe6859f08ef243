import re

from store_cms.domain.exceptions import ValidationError

IDENTIFIER_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_/-]+(\.[a-z0-9_-]+)?$")
NUMERIC_IDENTIFIER_PATTERN = re.compile(r"^[0-9]+$")

INVALID_IDENTIFIER_MESSAGE = "The page URL key contains capital letters or disallowed symbols."
NUMERIC_IDENTIFIER_MESSAGE = "The page URL key cannot be made of only numbers."

REQUIRED_FIELDS = ("title", "identifier")


def is_valid_identifier(identifier) -> bool:
    if not isinstance(identifier, str):
        return False
    return IDENTIFIER_PATTERN.fullmatch(identifier) is not None


def is_numeric_identifier(identifier) -> bool:
    if not isinstance(identifier, str):
        return False
    return NUMERIC_IDENTIFIER_PATTERN.fullmatch(identifier) is not None


def assert_page_identifier(page):
    if not is_valid_identifier(page.identifier):
        raise ValidationError(INVALID_IDENTIFIER_MESSAGE, rule="format")

    if is_numeric_identifier(page.identifier):
        raise ValidationError(NUMERIC_IDENTIFIER_MESSAGE, rule="numeric")


def assert_page(page):
    missing = [field for field in REQUIRED_FIELDS if not getattr(page, field)]

    if missing:
        raise ValidationError(
            f"Required page fields are missing: {', '.join(missing)}",
            rule="required",
        )

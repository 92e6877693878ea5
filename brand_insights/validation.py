"""Field checks run before a request is sent to the analytics API."""

import re

from .models import BrandAnalysisRequest

_WEBSITE_RE = re.compile(r"^https?://")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class FormValidationError(ValueError):
    def __init__(self, errors: dict[str, str]):
        super().__init__("; ".join(errors.values()))
        self.errors = errors


def validate_request_fields(
    brand_name: str,
    brand_website: str,
    contact_email: str,
) -> dict[str, str]:
    """
    Check the three form fields.

    Returns:
        Error message per failing field, keyed brandName / brandWebsite /
        contactEmail. Empty when everything is valid.
    """
    errors: dict[str, str] = {}

    if not brand_name.strip():
        errors["brandName"] = "Brand name is required"

    if not brand_website.strip():
        errors["brandWebsite"] = "Brand website is required"
    elif not _WEBSITE_RE.match(brand_website):
        errors["brandWebsite"] = "Website must start with http:// or https://"

    if not contact_email.strip():
        errors["contactEmail"] = "Contact email is required"
    elif not _EMAIL_RE.match(contact_email):
        errors["contactEmail"] = "Please enter a valid email address"

    return errors


def build_request(
    brand_name: str,
    brand_website: str,
    contact_email: str,
) -> BrandAnalysisRequest:
    """Validate the fields and build a request, raising FormValidationError on bad input."""
    errors = validate_request_fields(brand_name, brand_website, contact_email)
    if errors:
        raise FormValidationError(errors)
    return BrandAnalysisRequest(
        brand_name=brand_name,
        brand_website=brand_website,
        contact_email=contact_email,
    )

"""Localized customer-facing texts."""

from rentbill.core.config import settings

MESSAGES: dict[str, dict[str, str]] = {
    "he": {
        "overdue_reminder": (
            "שלום {customer_name}, זוהי תזכורת ממערכת {business_name}. "
            "מועד ההחזרה של הציוד המושכר עבר."
        ),
        "overdue_charge_description": "חיוב יומי על איחור בהשכרה - יום {days}",
        "payment_description": "תשלום עבור {customer_name}",
    },
    "en": {
        "overdue_reminder": (
            "Hello {customer_name}, this is a reminder from {business_name}. "
            "The return date of your rented equipment has passed."
        ),
        "overdue_charge_description": "Daily overdue rental charge - day {days}",
        "payment_description": "Payment for {customer_name}",
    },
}


def render(key: str, language: str | None = None, **values: object) -> str:
    """Render a message template, falling back to Hebrew for unknown languages."""
    templates = MESSAGES.get(language or settings.reminder_language, MESSAGES["he"])
    return templates[key].format(business_name=settings.business_name, **values)

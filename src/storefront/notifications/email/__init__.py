"""Mailer factory.

Provides get_mailer() / set_mailer() to swap implementations:
- FakeEmailAdapter when RESEND_API_KEY is unset (development, tests)
- ResendEmailAdapter otherwise
"""

from storefront import config
from storefront.notifications.email.fake_adapter import FakeEmailAdapter
from storefront.notifications.email.port import EmailPort

_current_mailer: EmailPort | None = None


def get_mailer() -> EmailPort:
    """Return the active mailer, building it from the environment on first use."""
    global _current_mailer
    if _current_mailer is None:
        api_key = config.resend_api_key()
        if api_key:
            from storefront.notifications.email.resend_adapter import ResendEmailAdapter

            _current_mailer = ResendEmailAdapter(api_key=api_key, sender=config.email_from())
        else:
            _current_mailer = FakeEmailAdapter()
    return _current_mailer


def set_mailer(mailer: EmailPort) -> None:
    """Override the active mailer (useful for tests)."""
    global _current_mailer
    _current_mailer = mailer


def reset_mailer() -> None:
    global _current_mailer
    _current_mailer = None

"""
SendGrid adapters for the notifier.
"""

from .client import SendGridTransport, build_mail_payload

__all__ = ["SendGridTransport", "build_mail_payload"]

import asyncio
import logging
from email.message import EmailMessage
from typing import Optional

import aiosmtplib

from ..core.config import settings

logger = logging.getLogger(__name__)


async def _send_async(msg: EmailMessage) -> None:
    await aiosmtplib.send(
        msg,
        hostname=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        username=settings.SMTP_USERNAME or None,
        password=settings.SMTP_PASSWORD or None,
        start_tls=bool(settings.SMTP_USERNAME),
    )


def send_email(recipient: str, subject: str, body: str, html: Optional[str] = None) -> bool:
    """Send an email via SMTP and log failures.

    Returns ``True`` when the message was handed to the SMTP server.
    """
    if not recipient:
        logger.warning("Skipping email %r: no recipient", subject)
        return False
    msg = EmailMessage()
    msg["From"] = settings.SMTP_FROM
    msg["To"] = recipient
    msg["Subject"] = subject
    msg.set_content(body)
    if html:
        msg.add_alternative(html, subtype="html")
    try:
        asyncio.run(_send_async(msg))
        logger.info("Sent email to %s", recipient)
        return True
    except (aiosmtplib.SMTPException, OSError) as exc:  # pragma: no cover - network issues
        logger.error("Failed to send email to %s: %s", recipient, exc)
        return False

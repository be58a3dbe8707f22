"""SMTP email sender."""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr

from event_match.config import EmailConfig

logger = logging.getLogger("event_match.notifications")


def send_email(
    config: EmailConfig,
    recipient: str,
    subject: str,
    html_body: str,
) -> bool:
    """Send an HTML email via SMTP.

    Returns True on success, False on failure.
    """
    if not config.sender_email or not config.sender_password:
        logger.error("Email credentials not configured")
        return False

    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = formataddr((config.from_name, config.sender_email))
    msg["To"] = recipient

    # Plain text fallback
    plain_text = f"View this email in an HTML-capable client.\n\nSubject: {subject}"
    msg.attach(MIMEText(plain_text, "plain"))
    msg.attach(MIMEText(html_body, "html"))

    try:
        with smtplib.SMTP(config.smtp_server, config.smtp_port, timeout=30) as server:
            server.ehlo()
            server.starttls()
            server.ehlo()
            server.login(config.sender_email, config.sender_password)
            server.sendmail(config.sender_email, recipient, msg.as_string())

        logger.info("Email sent: %s", subject)
        return True

    except smtplib.SMTPAuthenticationError:
        logger.error("SMTP authentication failed for %s", config.sender_email)
        return False
    except (smtplib.SMTPException, OSError) as e:
        logger.error("SMTP error sending email: %s", e)
        return False

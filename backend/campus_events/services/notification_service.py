"""Approval notices sent over SMTP.

Delivery is best-effort: every failure, including a timeout, is logged and
reported as ``False``; nothing here raises into the approval workflow.
"""
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from campus_events.config import settings

logger = logging.getLogger(__name__)

APPROVAL_SUBJECT = "Your University Event Management System Login"


def render_approval_notice(email: str, full_name: str, temporary_password: str) -> tuple[str, str]:
    """Return (text_body, html_body) for an approval notice."""
    text_body = f"""Hello {full_name},

Great news! Your account has been approved by our administrators.

Email: {email}
Temporary Password: {temporary_password}

Please change your password after logging in for the first time.

Best regards,
UEMS Team
"""
    html_body = f"""
    <html>
    <body style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
        <h1 style="color: #333;">Welcome to University Events!</h1>
        <p>Hello {full_name},</p>
        <p>Great news! Your account has been approved by our administrators.</p>
        <div style="background-color: #f5f5f5; padding: 20px; border-radius: 8px; margin: 20px 0;">
            <h2 style="margin-top: 0; color: #555;">Your Login Credentials</h2>
            <p><strong>Email:</strong> {email}</p>
            <p><strong>Temporary Password:</strong> <code>{temporary_password}</code></p>
        </div>
        <p><strong>Important:</strong> Please change your password after logging in for the first time.</p>
        <p>Best regards,<br><strong>UEMS Team</strong></p>
    </body>
    </html>
    """
    return text_body, html_body


class SmtpNotifier:
    """Notification collaborator backed by an SMTP relay."""

    def __init__(self, host: str = None, port: int = None, timeout: float = None):
        self.host = host or settings.SMTP_HOST
        self.port = port or settings.SMTP_PORT
        self.timeout = timeout or settings.NOTIFICATION_TIMEOUT_SECONDS

    def send_approval_notice(self, email: str, full_name: str, temporary_password: str) -> bool:
        if not self.host:
            logger.error("SMTP_HOST not configured; approval notice for %s not sent", email)
            return False

        text_body, html_body = render_approval_notice(email, full_name, temporary_password)
        msg = MIMEMultipart("alternative")
        msg["From"] = f"{settings.SMTP_FROM_NAME} <{settings.SMTP_FROM_EMAIL}>"
        msg["To"] = email
        msg["Subject"] = APPROVAL_SUBJECT
        msg.attach(MIMEText(text_body, "plain"))
        msg.attach(MIMEText(html_body, "html"))

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                if settings.SMTP_USE_TLS:
                    server.starttls()
                if settings.SMTP_USER:
                    server.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send approval notice to %s: %s", email, e)
            return False

        logger.info("Approval notice sent to %s", email)
        return True


def get_notifier() -> SmtpNotifier:
    """FastAPI dependency — overridable in tests."""
    return SmtpNotifier()

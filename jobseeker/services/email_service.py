"""Verification email delivery over SMTP."""

import logging
import smtplib
from email.message import EmailMessage

from jobseeker.config import Settings
from jobseeker.errors import EmailDeliveryError

logger = logging.getLogger(__name__)


class EmailService:
    """Sends verification codes. Without SMTP settings the code is logged instead."""

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def configured(self) -> bool:
        return self.settings.smtp_configured

    def send_verification_email(self, email: str, code: str) -> None:
        if not self.configured:
            logger.info("[EMAIL SERVICE] Verification code for %s: %s", email, code)
            return

        minutes = self.settings.verification_code_ttl_minutes
        msg = EmailMessage()
        msg["Subject"] = "Verify your email - JobSeeker"
        msg["From"] = self.settings.email_from
        msg["To"] = email
        msg.set_content(f"Your verification code is: {code}\n\nThis code expires in {minutes} minutes.")

        try:
            if self.settings.smtp_port == 465:
                with smtplib.SMTP_SSL(self.settings.smtp_host, self.settings.smtp_port, timeout=10) as server:
                    server.login(self.settings.smtp_user, self.settings.smtp_password)
                    server.send_message(msg)
            else:
                with smtplib.SMTP(self.settings.smtp_host, self.settings.smtp_port, timeout=10) as server:
                    server.starttls()
                    server.login(self.settings.smtp_user, self.settings.smtp_password)
                    server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.exception("Failed to send verification email to %s", email)
            raise EmailDeliveryError("Failed to send verification email") from e

"""
SMTP email sender adapter - Implements EmailSender protocol.

Delivers verification links through an SMTP relay with smtplib.
Failures are reported through the boolean result, never raised.
"""

import logging
import smtplib
from email.mime.text import MIMEText

logger = logging.getLogger(__name__)

SUBJECT = "Email Verification"


class SmtpEmailSender:
    """Implements EmailSender protocol over SMTP (STARTTLS + login when configured)."""

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def build_message(self, email: str, link: str) -> MIMEText:
        body = f"Click the following link to verify your email: {link}"
        message = MIMEText(body, "plain")
        message["From"] = self.sender
        message["To"] = email
        message["Subject"] = SUBJECT
        return message

    def send_verification_link(self, email: str, link: str) -> bool:
        """
        Send the verification email.

        Returns:
            True if the relay accepted the message, False otherwise
        """
        message = self.build_message(email, link)

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                if self.use_tls:
                    server.starttls()
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.send_message(message)
        except smtplib.SMTPException as e:
            logger.error(f"SMTP error sending verification email to {email}: {e}")
            return False
        except OSError as e:
            logger.error(f"Could not reach SMTP server {self.host}:{self.port}: {e}")
            return False

        logger.info(f"Verification email sent to {email}")
        return True

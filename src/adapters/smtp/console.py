"""
Console email sender adapter - Implements EmailSender protocol.

This module provides a console-based implementation of the domain's
email sender port, logging verification links for local development.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements EmailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - prints verification links to stdout.
    """

    def send_verification_link(self, email: str, link: str) -> bool:
        """
        Log the verification link (simulates email delivery).

        The link is logged at INFO level to be visible in container logs.
        Use SmtpEmailSender in production.

        Args:
            email: Recipient email address (normalized by domain layer)
            link: Verification URL including the token

        Returns:
            Always True
        """
        logger.info("[VERIFICATION] Email: %s Link: %s", email, link)
        return True

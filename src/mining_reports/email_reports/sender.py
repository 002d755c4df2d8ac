"""
Email sender for mining reports.

Wraps the SendGrid v3 client. The sender returns the provider's status
code untouched; deciding what counts as success is the caller's job.
"""

import logging
from pathlib import Path
from typing import Optional

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Content, Email, Mail, To

from mining_reports.models import EmailRequest


logger = logging.getLogger(__name__)

# SendGrid answers an accepted send with 202
SUCCESS_STATUS = 202


class EmailSender:
    """
    Thin wrapper around SendGridAPIClient.

    Args:
        api_key: SendGrid API key
        client: Pre-built client (used instead of creating one from api_key)
    """

    def __init__(self, api_key: str, client: Optional[SendGridAPIClient] = None):
        self.client = client or SendGridAPIClient(api_key)

    @staticmethod
    def build_message(request: EmailRequest) -> Mail:
        """Build a SendGrid Mail object from an EmailRequest."""
        message = Mail(
            from_email=Email(request.from_email, request.from_name),
            to_emails=To(request.to_email, request.to_name),
            subject=request.subject,
        )
        message.add_content(Content(request.content_type, request.content))
        return message

    def send(self, request: EmailRequest) -> int:
        """
        Send one message.

        Returns:
            Provider HTTP status code

        Raises:
            Whatever the SendGrid client raises on transport failure.
        """
        message = self.build_message(request)
        logger.info("Sending '%s' to %s", request.subject, request.to_email)
        response = self.client.send(message)
        logger.debug("Email provider answered %s", response.status_code)
        return response.status_code


def save_email_html(html_content: str, output_path: Path) -> None:
    """
    Save email HTML to file for preview.

    Args:
        html_content: HTML email content
        output_path: Path to save the HTML file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(html_content)
    logger.info("Email HTML saved to: %s", output_path)

"""
Email Reports Module for mining reports.

Renders HTML report bodies and delivers them through SendGrid.
"""

from mining_reports.email_reports.generator import format_credits_table, generate_24_hour_email
from mining_reports.email_reports.sender import SUCCESS_STATUS, EmailSender, save_email_html

__all__ = [
    "format_credits_table",
    "generate_24_hour_email",
    "EmailSender",
    "SUCCESS_STATUS",
    "save_email_html",
]

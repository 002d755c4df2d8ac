"""
HTML report bodies for mining report emails.

Amounts are printed as the floats they are; no rounding is applied to
mined or converted values.
"""

from datetime import date
from typing import Optional

from mining_reports.models import RecentCredits


def generate_24_hour_email(
    crypto_symbol: str,
    local_currency: str,
    mined: float,
    usd_value: float,
    local_value: float,
    report_date: Optional[date] = None,
) -> str:
    """
    Generate the HTML body for the 24-hour credit report.

    Args:
        crypto_symbol: Label of the mined coin (e.g. "ETH")
        local_currency: ISO code of the local currency (e.g. "CAD")
        mined: Coins credited over the last 24 hours
        usd_value: mined converted to USD
        local_value: usd_value converted to the local currency
        report_date: Date shown in the header (default: today)

    Returns:
        HTML string for the email
    """
    report_date = report_date or date.today()

    rows = [
        (f"{crypto_symbol} Mined", mined),
        ("USD Value", usd_value),
        (f"{local_currency} Value", local_value),
    ]
    rows_html = ""
    for label, value in rows:
        rows_html += f"""
        <tr>
            <td style="padding: 10px; border-bottom: 1px solid #30363d; color: #8b949e;">{label}</td>
            <td style="padding: 10px; border-bottom: 1px solid #30363d; text-align: right; color: #f0f6fc; font-weight: 600;">{value}</td>
        </tr>
        """

    html = f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>{crypto_symbol} Mining Report - {report_date}</title>
</head>
<body style="margin: 0; padding: 0; background-color: #0d1117; font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; color: #f0f6fc;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
        <div style="background: #161b22; border-radius: 12px; padding: 24px; margin-bottom: 20px; border: 1px solid #30363d;">
            <h1 style="color: #58a6ff; font-size: 22px; margin: 0 0 4px 0;">{crypto_symbol} Mining Report</h1>
            <p style="color: #8b949e; font-size: 14px; margin: 0;">Last 24 hours • {report_date.strftime("%B %d, %Y")}</p>
        </div>
        <div style="background: #161b22; border-radius: 12px; padding: 20px; border: 1px solid #30363d;">
            <table width="100%" cellpadding="0" cellspacing="0" style="font-size: 14px;">
                {rows_html}
            </table>
        </div>
    </div>
</body>
</html>
"""
    return html


def format_credits_table(
    credits: list[RecentCredits],
    crypto_usd: float,
    usd_local: float,
    local_currency: str,
) -> list[str]:
    """
    Format daily credit records as plain-text lines with fiat values.

    Returns:
        One line per record: date, amount, USD value, local value
    """
    lines = []
    for record in credits:
        usd_value = record.amount * crypto_usd
        local_value = usd_value * usd_local
        lines.append(
            f"{record.date or '-':<12} {record.amount:>14.8f} "
            f"USD {usd_value:>12.2f}  {local_currency} {local_value:>12.2f}"
        )
    return lines

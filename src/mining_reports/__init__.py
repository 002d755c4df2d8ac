"""
Mining Reports (mining-reports)

Automated bookkeeping reports for cryptocurrency mining farms. Polls a
mining pool's API for credited coins, converts them to USD and a local
currency, and emails the figures through SendGrid.
"""

__version__ = "0.1.0"
__author__ = "Mining Reports Team"

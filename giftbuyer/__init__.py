"""Building blocks for buying Telegram Star Gifts: invoices, payment, caches, monitoring and logs."""

__version__ = "0.1.0"
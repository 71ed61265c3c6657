"""Summary engine and money helpers."""
from .common import to_number, running_total, round_money, rate_label, sanitize_for_json
from .summary import summarize, parse_rate, parse_date_range, parse_merchants

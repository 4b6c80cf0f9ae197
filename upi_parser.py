"""Best-effort extraction of expense data from UPI payment notifications.

Messages such as "Paid Rs. 150.00 to Zomato for Food" or
"Sent INR 1,200 to Amit via UPI" are reduced to an amount, a note naming the
merchant and a category. Nothing here raises: whatever cannot be recognised
falls back to a default.
"""

import logging
import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Misc"
DEFAULT_NOTE = "UPI Payment"

AMOUNT_PATTERN = re.compile(
    r"(?:\bRs\.?|\bINR|\bAmt:?)\s*(\d[\d,]*(?:\.\d{1,2})?)",
    re.IGNORECASE,
)

MERCHANT_PATTERN = re.compile(
    r"\b(?:paid\s+(?:to|at)|to|at|paid|Ref:)\s+"
    r"([A-Za-z0-9&'\- ]+?)"
    r"(?=\s+(?:for|via|on|ref)\b|\s*@|[.,]|\s*$)",
    re.IGNORECASE,
)

# Captures that are really the amount phrase ("Paid Rs. 250 ...").
AMOUNT_LIKE = re.compile(r"^(?:rs|inr|amt)\b|^\d", re.IGNORECASE)

# Checked in order against the lowercased message; the first hit wins.
KNOWN_MERCHANTS = (
    "zomato",
    "swiggy",
    "uber",
    "ola",
    "rapido",
    "amazon",
    "flipkart",
    "myntra",
    "blinkit",
    "zepto",
    "netflix",
    "spotify",
    "hotstar",
    "jio",
    "airtel",
    "paytm",
    "phonepe",
    "gpay",
)

CATEGORY_RULES = (
    ("Food", ("zomato", "swiggy", "food", "restaurant", "cafe", "eat", "lunch", "dinner")),
    ("Travel", ("uber", "ola", "travel", "fuel", "petrol", "auto", "taxi")),
    ("Essentials", ("amazon", "flipkart", "shopping", "blinkit", "zepto", "grocery")),
    ("Entertainment", ("netflix", "movie", "cinema", "spotify", "game", "prime")),
    ("Academics", ("fees", "books", "course", "exam", "library")),
)


@dataclass
class ParsedMessage:
    amount: float
    category: str
    note: str
    date: str
    original_message: str

    def to_dict(self):
        return {
            "amount": self.amount,
            "category": self.category,
            "note": self.note,
            "date": self.date,
            "originalMessage": self.original_message,
        }


def extract_amount(message):
    match = AMOUNT_PATTERN.search(message)
    if not match:
        return 0.0
    amount = float(match.group(1).replace(",", ""))
    # A long enough digit run overflows to inf, which JSON cannot carry.
    return amount if math.isfinite(amount) else 0.0


def extract_merchant(message):
    """Return the payee named after a lead-in word such as "to" or "at"."""

    pos = 0
    while True:
        match = MERCHANT_PATTERN.search(message, pos)
        if match is None:
            return None
        candidate = match.group(1).strip()
        if len(candidate) >= 2 and not AMOUNT_LIKE.match(candidate):
            return candidate
        # A rejected capture can hide a later lead-in ("Paid 250 to Amit").
        pos = match.start(1)


def match_known_merchant(message, merchants=KNOWN_MERCHANTS):
    lowered = message.lower()
    for name in merchants:
        if name in lowered:
            return name[0].upper() + name[1:]
    return None


def categorize(message, rules=CATEGORY_RULES):
    lowered = message.lower()
    for category, keywords in rules:
        if any(keyword in lowered for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def parse_upi_message(message, now=None):
    """Turn a free-text payment notification into a ParsedMessage.

    The returned date is always the parse time (``now`` when given), even if
    the message itself mentions a date.
    """

    text = message or ""
    merchant = extract_merchant(text)
    if merchant is None:
        merchant = match_known_merchant(text)
        if merchant is not None:
            logger.debug("Merchant resolved from known list: %s", merchant)

    note = f"Paid to {merchant}" if merchant else DEFAULT_NOTE
    timestamp = now or datetime.now(timezone.utc)

    parsed = ParsedMessage(
        amount=extract_amount(text),
        category=categorize(text),
        note=note,
        date=timestamp.isoformat(),
        original_message=text,
    )
    logger.debug("Parsed UPI message: amount=%s category=%s", parsed.amount, parsed.category)
    return parsed

import os
from dataclasses import dataclass

# days covered by the trailing window of each period
PERIOD_DAYS = {
    "week": 7,
    "month": 30,
    "year": 365,
}

# number of chart buckets per period (independent of PERIOD_DAYS)
PERIOD_BUCKETS = {
    "week": 7,
    "month": 4,
    "year": 12,
}

CATEGORY_PALETTE = (
    "#007AFF",  # blue
    "#34C759",  # green
    "#FF9500",  # orange
    "#FF3B30",  # red
    "#AF52DE",  # purple
    "#FF2D55",  # pink
    "#FFCC00",  # yellow
    "#5856D6",  # indigo
    "#00C7BE",  # mint
    "#32ADE6",  # cyan
    "#30B0C7",  # teal
    "#A2845E",  # brown
    "#8E8E93",  # gray
)
PALETTE_SIZE = len(CATEGORY_PALETTE)

OTHER_CATEGORY = "Other"
DEFAULT_TOP_CATEGORIES = 5

# (emoji, label) pairs offered by the transaction form
INCOME_CATEGORIES = (
    ("💰", "Salary"),
    ("🎁", "Gift"),
    ("📈", "Investment"),
    ("💼", "Freelance"),
    ("🏠", "Rental Income"),
    ("💵", "Bonus"),
    ("🏆", "Prize"),
    ("💳", "Refund"),
)

EXPENSE_CATEGORIES = (
    # Food & Dining
    ("🛒", "Groceries"),
    ("🍕", "Restaurants"),
    ("☕", "Coffee & Drinks"),
    ("🥡", "Takeout"),
    # Transportation
    ("⛽", "Gas"),
    ("🚗", "Car Maintenance"),
    ("🚌", "Public Transport"),
    ("🚕", "Taxi & Rideshare"),
    # Bills & Utilities
    ("🏠", "Rent/Mortgage"),
    ("⚡", "Utilities"),
    ("📱", "Phone Bill"),
    ("🌐", "Internet"),
    ("📺", "Streaming Services"),
    # Shopping
    ("👕", "Clothing"),
    ("🛍️", "Shopping"),
    ("🎮", "Electronics"),
    ("📚", "Books & Education"),
    # Health & Fitness
    ("🏥", "Healthcare"),
    ("💊", "Pharmacy"),
    ("🏋️", "Gym & Fitness"),
    ("💄", "Personal Care"),
    # Entertainment
    ("🎬", "Entertainment"),
    ("🎵", "Music"),
    ("🎯", "Hobbies"),
    ("✈️", "Travel"),
    # Other
    ("🎓", "Education"),
    ("🐕", "Pets"),
    ("💳", "Banking Fees"),
    ("❓", "Other"),
)

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

CURRENCY_SYMBOL = "€"
DEFAULT_DATA_PATH = "data/transactions.json"


@dataclass(frozen=True)
class Settings:
    data_path: str = DEFAULT_DATA_PATH
    currency: str = CURRENCY_SYMBOL
    seed_sample: bool = True
    log_level: str = "INFO"


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_settings() -> Settings:
    """Read runtime settings from FINANCE_* environment variables."""
    return Settings(
        data_path=os.getenv("FINANCE_DATA_PATH", DEFAULT_DATA_PATH),
        currency=os.getenv("FINANCE_CURRENCY", CURRENCY_SYMBOL),
        seed_sample=_env_flag("FINANCE_SEED_SAMPLE", True),
        log_level=os.getenv("FINANCE_LOG_LEVEL", "INFO").upper(),
    )

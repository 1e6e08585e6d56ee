from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

from core.domain import Transaction

# (hours ago, days ago, amount, note, category)
_SAMPLES = (
    (1, 0, "-4.50", "Morning coffee", "☕ Coffee & Drinks"),
    (3, 0, "-12.99", "Lunch at bistro", "🍕 Restaurants"),
    (5, 0, "2500.00", "Monthly salary", "💰 Salary"),
    (0, 1, "-45.67", "Weekly groceries", "🛒 Groceries"),
    (0, 1, "-8.99", "Netflix subscription", "📺 Streaming Services"),
    (0, 1, "-25.00", "Gas station", "⛽ Gas"),
    (0, 2, "-15.50", "Coffee shop meeting", "☕ Coffee & Drinks"),
    (0, 2, "-89.99", "New running shoes", "👕 Clothing"),
    (0, 2, "50.00", "Birthday gift money", "🎁 Gift"),
    (0, 3, "-1200.00", "Monthly rent", "🏠 Rent/Mortgage"),
    (0, 3, "-65.43", "Electricity bill", "⚡ Utilities"),
    (0, 3, "-30.00", "Phone bill", "📱 Phone Bill"),
    (0, 7, "-120.00", "Doctor visit", "🏥 Healthcare"),
    (0, 7, "200.00", "Freelance project", "💼 Freelance"),
    (0, 8, "-67.89", "Dinner with friends", "🍕 Restaurants"),
    (0, 9, "-39.99", "Gym membership", "🏋️ Gym & Fitness"),
    (0, 12, "-450.00", "Car insurance", "🚗 Car Maintenance"),
    (0, 15, "150.00", "Sold old books", "💵 Other"),
    (0, 18, "-28.50", "Movie tickets", "🎬 Entertainment"),
    (0, 20, "-95.00", "Vet visit for cat", "🐕 Pets"),
)


def sample_transactions(now: Optional[datetime] = None) -> tuple[Transaction, ...]:
    now = now or datetime.now()
    return tuple(
        Transaction(
            timestamp=now - timedelta(days=days, hours=hours),
            amount=Decimal(amount),
            note=note,
            category=category,
        )
        for hours, days, amount, note, category in _SAMPLES
    )


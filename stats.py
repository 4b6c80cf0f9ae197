"""Dashboard statistics and spending insights for one user's ledger."""

import calendar
import logging
from collections import defaultdict
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

RECENT_EXPENSES_LIMIT = 5


@dataclass
class CategoryStat:
    category: str
    total: float
    percentage: float

    def to_dict(self):
        return {"category": self.category, "total": self.total, "percentage": self.percentage}


@dataclass
class MonthlyStat:
    month: str
    total: float

    def to_dict(self):
        return {"month": self.month, "total": self.total}


@dataclass
class Insight:
    id: str
    type: str
    message: str
    related_expense_ids: list = field(default_factory=list)

    def to_dict(self):
        data = {"id": self.id, "type": self.type, "message": self.message}
        if self.related_expense_ids:
            data["relatedExpenseIds"] = list(self.related_expense_ids)
        return data


@dataclass
class DashboardStats:
    total_spent: float
    category_stats: list
    monthly_stats: list
    recent_expenses: list
    insights: list

    def to_dict(self):
        return {
            "totalSpent": self.total_spent,
            "categoryStats": [stat.to_dict() for stat in self.category_stats],
            "monthlyStats": [stat.to_dict() for stat in self.monthly_stats],
            "recentExpenses": [expense.to_dict() for expense in self.recent_expenses],
            "insights": [insight.to_dict() for insight in self.insights],
        }


def build_category_stats(expenses, total_spent):
    """Sum amounts per category, largest total first.

    Categories without expenses are left out. Percentages are 0 when
    nothing has been spent.
    """

    totals = defaultdict(float)
    for expense in expenses:
        totals[expense.category] += expense.amount

    stats = [
        CategoryStat(
            category=category,
            total=total,
            percentage=(total / total_spent) * 100 if total_spent > 0 else 0,
        )
        for category, total in totals.items()
    ]
    stats.sort(key=lambda stat: stat.total, reverse=True)
    return stats


def build_monthly_stats(expenses):
    # Bucketed by month of year only: March 2024 and March 2025 share "Mar".
    totals = defaultdict(float)
    for expense in expenses:
        totals[expense.date.month] += expense.amount

    return [
        MonthlyStat(month=calendar.month_abbr[month], total=totals[month])
        for month in sorted(totals)
    ]


def recent_expenses(expenses, limit=RECENT_EXPENSES_LIMIT):
    return sorted(expenses, key=lambda expense: expense.date, reverse=True)[:limit]


def find_stat(category_stats, category):
    for stat in category_stats:
        if stat.category == category:
            return stat
    return None


def entertainment_warning(category_stats):
    stat = find_stat(category_stats, "Entertainment")
    if stat is None or stat.percentage <= 30:
        return None
    return Insight(
        id="impulsive-entertainment",
        type="warning",
        message=(
            f"Your entertainment spending is {stat.percentage:.1f}% of your total expenses. "
            "Consider setting a limit."
        ),
    )


def food_info(category_stats):
    stat = find_stat(category_stats, "Food")
    if stat is None or stat.percentage <= 40:
        return None
    return Insight(
        id="high-food",
        type="info",
        message=f"You're spending a lot on Food ({stat.percentage:.1f}%). Try cooking more often!",
    )


# Evaluated in order; each rule adds at most one insight.
INSIGHT_RULES = (
    entertainment_warning,
    food_info,
)

DEFAULT_INSIGHT = Insight(
    id="good-job",
    type="success",
    message="You're doing great! Keep tracking your expenses to get more insights.",
)


def build_insights(category_stats):
    insights = []
    for rule in INSIGHT_RULES:
        insight = rule(category_stats)
        if insight is not None:
            insights.append(insight)

    if not insights:
        insights.append(DEFAULT_INSIGHT)
    return insights


def build_dashboard_stats(expenses):
    """Compute the dashboard snapshot from a user's complete ledger.

    ``expenses`` must be the full, unfiltered set: percentages and monthly
    totals are relative to everything passed in.
    """

    total_spent = sum(expense.amount for expense in expenses)
    category_stats = build_category_stats(expenses, total_spent)

    stats = DashboardStats(
        total_spent=total_spent,
        category_stats=category_stats,
        monthly_stats=build_monthly_stats(expenses),
        recent_expenses=recent_expenses(expenses),
        insights=build_insights(category_stats),
    )
    logger.debug(
        "Built dashboard stats from %d expenses across %d categories",
        len(expenses),
        len(category_stats),
    )
    return stats

"""
Expense storage backed by Flask-SQLAlchemy.

ExpenseStorage is the only place that touches db.session. It hands back
Expense model instances; the statistics code works on whatever it returns.
"""

import logging
from typing import List, Optional

from models import db, Expense

logger = logging.getLogger(__name__)


class ExpenseStorage:
    """
    Read and write one user's expenses.

    get_expenses() returns the complete ledger for a user, with no paging or
    filtering, so that totals and percentages are computed over everything.
    """

    def get_expenses(self, user_id: str) -> List[Expense]:
        return Expense.query.filter(Expense.user_id == user_id)\
            .order_by(Expense.date.desc())\
            .all()

    def get_expense(self, expense_id: int) -> Optional[Expense]:
        return db.session.get(Expense, expense_id)

    def create_expense(self, user_id: str, values: dict) -> Expense:
        expense = Expense(user_id=user_id, **values)
        db.session.add(expense)
        db.session.commit()
        logger.info("Created expense %s for user %s", expense.id, user_id)
        return expense

    def delete_expense(self, expense: Expense) -> None:
        expense_id, user_id = expense.id, expense.user_id
        db.session.delete(expense)
        db.session.commit()
        logger.info("Deleted expense %s for user %s", expense_id, user_id)

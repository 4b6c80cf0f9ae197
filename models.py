from flask_sqlalchemy import SQLAlchemy
from datetime import datetime

db = SQLAlchemy()

CATEGORIES = (
    'Food',
    'Travel',
    'Academics',
    'Entertainment',
    'Essentials',
    'Shopping',
    'Misc',
)

PAYMENT_TYPES = ('manual', 'upi')


class Expense(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(64), nullable=False, index=True)
    amount = db.Column(db.Float, nullable=False)
    category = db.Column(db.String(50), nullable=False)
    note = db.Column(db.String(200))
    payment_type = db.Column(db.String(20), nullable=False, default='manual')
    date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    raw_message = db.Column(db.Text)
    is_impulsive = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'amount': self.amount,
            'category': self.category,
            'note': self.note,
            'paymentType': self.payment_type,
            'date': self.date.isoformat() if self.date else None,
            'rawMessage': self.raw_message,
            'isImpulsive': bool(self.is_impulsive),
        }

import os
from flask import Flask, jsonify, request, redirect, url_for, abort, current_app
from werkzeug.exceptions import HTTPException
from sqlalchemy.engine import make_url
from models import db
from config import Config
from logger import setup_logger
from stats import build_dashboard_stats
from storage import ExpenseStorage
from upi_parser import parse_upi_message
from validators import ExpenseValidationError, validate_expense_payload, validate_parse_payload

storage = ExpenseStorage()


def ensure_sqlite_dir(uri):
    url = make_url(uri)
    database = url.database
    if url.get_backend_name() == 'sqlite' and database and os.path.isabs(database):
        os.makedirs(os.path.dirname(database), exist_ok=True)


def current_user_id():
    user_id = request.headers.get('X-User-Id') or current_app.config.get('DEFAULT_USER_ID')
    if not user_id:
        abort(401, description='Unauthorized')
    return user_id


def owned_expense_or_abort(expense_id, user_id):
    expense = storage.get_expense(expense_id)
    if expense is None:
        abort(404, description='Expense not found')
    if expense.user_id != user_id:
        abort(403, description='Forbidden')
    return expense


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    logger = setup_logger(__name__, app.config['LOG_LEVEL'])

    ensure_sqlite_dir(app.config['SQLALCHEMY_DATABASE_URI'])
    db.init_app(app)
    with app.app_context():
        db.create_all()

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'message': error.description}), error.code

    @app.errorhandler(ExpenseValidationError)
    def handle_validation_error(error):
        return jsonify({'message': error.message, 'field': error.field}), 400

    @app.route('/')
    def home():
        return redirect(url_for('stats'))

    @app.route('/api/stats')
    def stats():
        user_id = current_user_id()
        # Recomputed from the full ledger on every read; nothing is cached.
        expenses = storage.get_expenses(user_id)
        return jsonify(build_dashboard_stats(expenses).to_dict())

    @app.route('/api/expenses/parse-upi', methods=['POST'])
    def parse_upi():
        current_user_id()
        message = validate_parse_payload(request.get_json(silent=True))
        return jsonify(parse_upi_message(message).to_dict())

    @app.route('/api/expenses', methods=['POST'])
    def create_expense():
        user_id = current_user_id()
        values = validate_expense_payload(request.get_json(silent=True))
        expense = storage.create_expense(user_id, values)
        return jsonify(expense.to_dict()), 201

    @app.route('/api/expenses/<int:id>', methods=['GET'])
    def get_expense(id):
        expense = owned_expense_or_abort(id, current_user_id())
        return jsonify(expense.to_dict())

    @app.route('/api/expenses/<int:id>', methods=['DELETE'])
    def delete_expense(id):
        expense = owned_expense_or_abort(id, current_user_id())
        storage.delete_expense(expense)
        return '', 204

    logger.info("Expense tracker ready (database: %s)", app.config['SQLALCHEMY_DATABASE_URI'])
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)

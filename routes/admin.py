# routes/admin.py
from flask import Blueprint, jsonify, current_app
import logging

from schemas.verse_schemas import AmountUpdate
from utils.auth import token_required
from utils.errors import VerseOracleError
from utils.payload import load_payload

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__)

def _service():
    return current_app.extensions['verse_oracle']

@admin_bp.route('/owner', methods=['GET'])
def get_owner():
    return jsonify({"owner": _service().owner})

@admin_bp.route('/price', methods=['GET'])
def get_price():
    return jsonify({"amount": _service().get_price()})

@admin_bp.route('/price', methods=['PUT'])
@token_required
def set_price(caller):
    payload, error = load_payload(AmountUpdate)
    if error:
        return error

    try:
        _service().set_price(payload.amount, caller)
        return jsonify({"amount": payload.amount})
    except VerseOracleError as e:
        return jsonify(e.to_json()), e.status_code
    except Exception as e:
        logger.error(f"Error setting verse price: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to set verse price"}), 500

@admin_bp.route('/gas-limit', methods=['GET'])
def get_gas_limit():
    return jsonify({"amount": _service().get_budget()})

@admin_bp.route('/gas-limit', methods=['PUT'])
@token_required
def set_gas_limit(caller):
    payload, error = load_payload(AmountUpdate)
    if error:
        return error

    try:
        _service().set_budget(payload.amount, caller)
        return jsonify({"amount": payload.amount})
    except VerseOracleError as e:
        return jsonify(e.to_json()), e.status_code
    except Exception as e:
        logger.error(f"Error setting oracle gas limit: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to set oracle gas limit"}), 500

@admin_bp.route('/treasury', methods=['GET'])
def get_treasury():
    return jsonify({"balance": _service().get_balance()})

@admin_bp.route('/withdraw', methods=['POST'])
@token_required
def withdraw(caller):
    service = _service()
    try:
        amount = service.withdraw(caller)
        return jsonify({"amount": amount, "recipient": service.owner})
    except VerseOracleError as e:
        return jsonify(e.to_json()), e.status_code
    except Exception as e:
        logger.error(f"Error withdrawing treasury: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to withdraw"}), 500

@admin_bp.route('/pending', methods=['GET'])
@token_required
def list_pending(caller):
    try:
        return jsonify(_service().list_pending(caller))
    except VerseOracleError as e:
        return jsonify(e.to_json()), e.status_code
    except Exception as e:
        logger.error(f"Error listing pending queries: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to list pending queries"}), 500

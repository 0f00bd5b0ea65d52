# routes/oracle.py
from flask import Blueprint, jsonify, current_app
import logging

from schemas.verse_schemas import OracleCallback
from utils.auth import token_required
from utils.errors import VerseOracleError
from utils.payload import load_payload

logger = logging.getLogger(__name__)

oracle_bp = Blueprint('oracle', __name__)

@oracle_bp.route('/callback', methods=['POST'])
@token_required
def oracle_callback(caller):
    """Result delivery from the oracle. Only the configured oracle principal is accepted."""
    payload, error = load_payload(OracleCallback)
    if error:
        return error

    service = current_app.extensions['verse_oracle']
    try:
        fields = service.fulfill(payload.query_id, payload.result, caller)
        return jsonify({"query_id": payload.query_id, "status": "resolved", **fields.to_json()})
    except VerseOracleError as e:
        return jsonify(e.to_json()), e.status_code
    except Exception as e:
        logger.error(f"Error processing oracle result for {payload.query_id}: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to process oracle result"}), 500

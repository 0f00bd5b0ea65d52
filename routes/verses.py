# routes/verses.py
from flask import Blueprint, jsonify, current_app
import logging

from schemas.verse_schemas import VerseRequestCreate, ParsePreview
from utils.auth import token_required
from utils.errors import VerseOracleError
from utils.parser import parse_response
from utils.payload import load_payload

logger = logging.getLogger(__name__)

verses_bp = Blueprint('verses', __name__)

def _service():
    return current_app.extensions['verse_oracle']

@verses_bp.route('/', methods=['POST'])
@token_required
def request_verse(caller):
    """Pay for a reference and send it to the oracle. Resolution arrives later."""
    payload, error = load_payload(VerseRequestCreate)
    if error:
        return error

    try:
        query_id = _service().request(payload.reference, payload.payment, caller)
        return jsonify({
            "query_id": query_id,
            "reference": payload.reference,
            "status": "pending"
        }), 202
    except VerseOracleError as e:
        return jsonify(e.to_json()), e.status_code
    except Exception as e:
        logger.error(f"Error requesting verse {payload.reference}: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to request verse"}), 500

@verses_bp.route('/status/<path:reference>', methods=['GET'])
def get_status(reference):
    try:
        return jsonify({"reference": reference, "status": _service().get_status(reference)})
    except Exception as e:
        logger.error(f"Error fetching status for {reference}: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to fetch status"}), 500

@verses_bp.route('/parse', methods=['POST'])
def parse_preview():
    """Run the oracle result parser without touching any state."""
    payload, error = load_payload(ParsePreview)
    if error:
        return error

    try:
        return jsonify(parse_response(payload.result).to_json())
    except VerseOracleError as e:
        return jsonify(e.to_json()), e.status_code

@verses_bp.route('/<path:reference>', methods=['GET'])
def get_verse(reference):
    try:
        verse = _service().get_verse(reference)
    except Exception as e:
        logger.error(f"Error fetching verse {reference}: {str(e)}", exc_info=True)
        return jsonify({"error": "Failed to fetch verse"}), 500

    if verse is None:
        return jsonify({"error": "Verse not resolved", "reference": reference}), 404
    return jsonify(verse)

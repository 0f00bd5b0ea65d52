# utils/payload.py
import json
from flask import request, jsonify
from pydantic import ValidationError

def load_payload(schema):
    """Validate the JSON body against a pydantic schema.

    Returns ``(model, None)`` or ``(None, error_response)``.
    """
    data = request.get_json(silent=True)
    if data is None:
        return None, (jsonify({"error": "Invalid JSON payload"}), 400)

    try:
        return schema.model_validate(data), None
    except ValidationError as e:
        details = json.loads(e.json(include_url=False))
        return None, (jsonify({"error": "Invalid request body", "details": details}), 400)

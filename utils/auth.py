# utils/auth.py
import jwt
from datetime import datetime, timedelta, timezone
from functools import wraps
from flask import request, jsonify, current_app
import logging

logger = logging.getLogger(__name__)

JWT_EXPIRATION_HOURS = 24

def generate_token(principal, secret, audience='authenticated', hours=JWT_EXPIRATION_HOURS):
    """Generate a JWT token naming a principal in its ``sub`` claim"""
    expiration = datetime.now(timezone.utc) + timedelta(hours=hours)
    return jwt.encode(
        {
            'sub': principal,
            'aud': audience,
            'exp': expiration
        },
        secret,
        algorithm='HS256'
    )

def token_required(f):
    """Decorator to protect routes with JWT; passes the caller principal first"""
    @wraps(f)
    def decorated(*args, **kwargs):
        token = None
        auth_header = request.headers.get('Authorization')

        if auth_header:
            try:
                token = auth_header.split(" ")[1]
            except IndexError:
                logger.warning("Invalid token format in Authorization header.")
                return jsonify({'error': 'Invalid token format'}), 401
        else:
            logger.warning(f"Authorization header missing for {request.path}")

        if not token:
            return jsonify({'error': 'Token is required'}), 401

        try:
            data = jwt.decode(
                token,
                current_app.config['JWT_SECRET'],
                algorithms=["HS256"],
                audience=current_app.config['JWT_AUDIENCE']
            )
            caller = data['sub']
        except jwt.ExpiredSignatureError:
            logger.warning("Token has expired.")
            return jsonify({'error': 'Token has expired'}), 401
        except (jwt.InvalidTokenError, KeyError) as e:
            logger.warning(f"Invalid token: {e}")
            return jsonify({'error': 'Invalid token'}), 401

        return f(caller, *args, **kwargs)

    return decorated

from datetime import datetime, timezone
from flask import Blueprint, jsonify

bp = Blueprint('health', __name__)


@bp.route('/health', methods=['GET'])
def health():
    """Liveness probe; does not touch the database"""
    return jsonify({'status': 'ok', 'timestamp': datetime.now(timezone.utc).isoformat()})

from flask import Blueprint
from datetime import datetime, timezone

bp = Blueprint('main', __name__)

# Makes the current UTC time available in all templates
@bp.app_context_processor
def inject_now():
    return {'now': datetime.now(timezone.utc)}

# Import routes and filters at the bottom
from targetplanner.main import routes, filters

# ==============================================================================
# targetplanner/__init__.py
# ------------------------------------------------------------------------------
# Application factory for creating and configuring the Flask app instance.
# ==============================================================================

import logging
from flask import Flask
from config import Config
from targetplanner.calculator.session import SessionStore


def create_app(config_class=Config):
    """
    Application factory function. Creates and configures the Flask application.

    Args:
        config_class (class): The configuration class to use.

    Returns:
        Flask: The configured Flask application instance.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Configure logging
    logging.basicConfig(level=logging.INFO,
                        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s')

    # Planner state lives in memory only, one entry per browser session
    app.extensions['planner_sessions'] = SessionStore(app.config['DEFAULT_PRODUCT_COUNT'],
                                                     idle_timeout=app.config['SESSION_IDLE_TIMEOUT'])

    # Register blueprints with the application
    from targetplanner.main import bp as main_bp
    app.register_blueprint(main_bp)

    @app.cli.command("reset-sessions")
    def reset_sessions():
        """Discards every in-memory planner session."""
        count = app.extensions['planner_sessions'].clear()
        app.logger.info(f"Discarded {count} planner session(s).")

    app.logger.info('Sales Target Planner startup complete')

    return app

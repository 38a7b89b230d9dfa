# ==============================================================================
# config.py
# ------------------------------------------------------------------------------
# Configuration settings for the Flask application.
# Uses environment variables for sensitive data to keep them out of version control.
# ==============================================================================

import os
from dotenv import load_dotenv

# Determine the absolute path of the project directory
basedir = os.path.abspath(os.path.dirname(__file__))

# Load environment variables from a .env file located in the project root
load_dotenv(os.path.join(basedir, '.env'))

class Config:
    """
    Base configuration class. Contains default settings that can be overridden
    by environment-specific configurations.
    """
    # --- Security ---
    # Signs the session cookie that holds the planner token, and the CSRF tokens.
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-should-really-set-a-secret-key-in-your-env-file'

    # --- Planner ---
    # Allowed distance of the product-value total from 100. 0 means exact equality.
    PRODUCT_VALUE_TOLERANCE = float(os.environ.get('PRODUCT_VALUE_TOLERANCE') or 0.0)

    # Number of empty products a new session starts with.
    DEFAULT_PRODUCT_COUNT = int(os.environ.get('DEFAULT_PRODUCT_COUNT') or 3)

    # Seconds a planner session may sit unused before it is discarded. 0 keeps sessions forever.
    SESSION_IDLE_TIMEOUT = float(os.environ.get('SESSION_IDLE_TIMEOUT') or 7200)

    CURRENCY_SYMBOL = os.environ.get('CURRENCY_SYMBOL') or '₹'

    # --- PDF Export ---
    # Explicit path to the wkhtmltopdf binary; None searches the PATH.
    WKHTMLTOPDF_PATH = os.environ.get('WKHTMLTOPDF_PATH') or None

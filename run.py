# ==============================================================================
# run.py
# ------------------------------------------------------------------------------
# The main entry point to launch the Flask application.
# ==============================================================================

from targetplanner import create_app
from targetplanner.calculator.engine import calculate_targets, summarize_results
from targetplanner.calculator.session import PlannerSession
from targetplanner.calculator.validator import validate_inputs

# Create the Flask application instance using the factory function
app = create_app()

@app.shell_context_processor
def make_shell_context():
    """Provides a shell context for the `flask shell` command."""
    return {
        'PlannerSession': PlannerSession,
        'calculate_targets': calculate_targets,
        'summarize_results': summarize_results,
        'validate_inputs': validate_inputs,
    }

if __name__ == '__main__':
    app.run(debug=True)

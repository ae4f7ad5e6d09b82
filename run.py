# run.py
# Entry point for running the Flask application.
import sys
import traceback
from catalogo.app import create_app
from catalogo.utils.logger import logger
from catalogo.config.settings import load_config

# Load configuration early
config = load_config()

if __name__ == '__main__':
    try:
        app = create_app(config)
    except Exception as e:
        logger.critical(f"Fatal error creating application: {e}", exc_info=True)
        sys.exit(1)

    logger.info(f"Starting server on {config.APP_HOST}:{config.APP_PORT}")

    try:
        # Use waitress or gunicorn for production instead of app.run
        app.run(host=config.APP_HOST, port=config.APP_PORT, debug=config.APP_DEBUG)
    except Exception as e:
        logger.critical(f"Fatal error starting server: {e}", exc_info=True)
        logger.critical(f"Traceback: {traceback.format_exc()}")
        sys.exit(1)

#!/usr/bin/env python3
"""
Run script for the Patrimônio API
"""

from dotenv import load_dotenv

# Load environment variables from .env file before the app reads them
load_dotenv()

import argparse
import os
import sys
from patrimonio import create_app
from patrimonio.build import build_database
from patrimonio.utils.logger import get_logger

# Note: run 'python generate_env.py' to create a .env file with SECRET_KEY,
# JWT_SECRET and the default admin password.

logger = get_logger("patrimonio.run")


def parse_arguments():
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='Patrimônio API')
    parser.add_argument('--build-only', action='store_true',
                        help='Build database tables and critical data, then exit without starting the server')
    parser.add_argument('--no-seed', action='store_false', dest='seed_reference',
                        help='Skip the default categories and locations. Critical data is ALWAYS inserted.')
    return parser.parse_args()


if __name__ == '__main__':
    args = parse_arguments()
    app = create_app()

    logger.debug("Starting Patrimônio API...")
    build_database(app, seed_reference=args.seed_reference)

    if args.build_only:
        logger.info("Build completed. Exiting without starting web server.")
        sys.exit(0)

    # FLASK_DEBUG: Enable/disable debug mode (default: False for security)
    debug_mode = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1', 'yes', 'on')

    # USE_RELOADER: Enable/disable auto-reloader (default: False)
    use_reloader = os.environ.get('USE_RELOADER', 'False').lower() in ('true', '1', 'yes', 'on')

    # FLASK_HOST: Server host (default: 127.0.0.1 for security)
    host = os.environ.get('FLASK_HOST', '127.0.0.1')

    # FLASK_PORT: Server port (default: 5000)
    port = int(os.environ.get('FLASK_PORT', '5000'))

    if debug_mode:
        logger.warning("DEBUG MODE ENABLED - Do not use in production!")

    logger.info(f"Starting server on {host}:{port} (debug={debug_mode}, reloader={use_reloader})")
    app.run(debug=debug_mode, host=host, port=port, use_reloader=use_reloader)

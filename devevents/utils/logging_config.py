"""Logging configuration for the application."""

import logging
import os
import sys

def setup_logging():
    """Configure logging for the application."""
    root_logger = logging.getLogger()
    level_name = os.environ.get('LOG_LEVEL', 'INFO').upper()
    root_logger.setLevel(getattr(logging, level_name, logging.INFO))

    # Only attach our console handler once, even if the app is created repeatedly
    if not any(getattr(handler, '_devevents', False) for handler in root_logger.handlers):
        # Create a formatter
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        # Create a console handler
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler._devevents = True
        root_logger.addHandler(console_handler)

    # Set higher log levels for noisy components
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('cloudinary').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
    logging.getLogger('multipart').setLevel(logging.WARNING)

"""
Process setup shared by all CLI commands: logging and environment.
"""

from nodegate.config import load_environment as _load_dotenv
from nodegate.logger import get_logger, setup_logging


def configure_logging(verbose: bool = False):
    """Configure logging for the CLI."""
    setup_logging(level="DEBUG" if verbose else "WARNING")


def load_environment():
    """Load gateway settings from a .env file in the working directory."""
    _load_dotenv()
    get_logger(__name__).debug("Environment loaded")

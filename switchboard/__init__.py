"""Switchboard

Provider registry and model resolution service: keeps a cached, deduplicated
catalog of models across AI providers and routes generation requests to the
provider that serves the requested model.
"""

from importlib.metadata import PackageNotFoundError, version

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

try:
    __version__ = version("switchboard")
except PackageNotFoundError:
    # Running from a source checkout without an install
    __version__ = "0.0.0"
__author__ = "Switchboard"

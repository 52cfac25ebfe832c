"""
Adapters package - External service connections.
MongoDB food catalog, USDA and Open Food Facts HTTP clients, OpenAI.
"""

from adapters import mongo_adapter, openai_adapter
from adapters.usda_client import USDAClient
from adapters.openfoodfacts_client import OpenFoodFactsClient

__all__ = [
    "mongo_adapter",
    "openai_adapter",
    "USDAClient",
    "OpenFoodFactsClient",
]

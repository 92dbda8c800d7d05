"""Base class for async HTTP clients."""

import logging
from typing import Dict

import httpx

from ..application.domain import ServiceEndpoint
from ..application.exceptions import ConfigurationError


class BaseClient:
    """A base client that holds an async client and builds auth headers."""

    def __init__(self, client: httpx.AsyncClient):
        """
        Initializes the base client.

        Args:
            client: An instance of httpx.AsyncClient.
        """

        self.client = client
        self.logger = logging.getLogger(self.__class__.__name__)

    def _auth_headers(self, endpoint: ServiceEndpoint) -> Dict[str, str]:
        """
        Reveals the endpoint credential and builds the bearer header.

        Raises:
            ConfigurationError: If the URL or token is missing, or the token
                                appears to be a placeholder.
        """

        if not endpoint.base_url:
            raise ConfigurationError(
                f"Sweagle URL for {self.__class__.__name__} is missing. "
                f"Please check your config files."
            )

        token = endpoint.credential.reveal()
        if not token or "YOUR_" in token.upper():
            raise ConfigurationError(
                f"Authentication token for {self.__class__.__name__} is missing "
                f"or is a placeholder. Please check your config files."
            )

        return {"Authorization": f"Bearer {token}"}

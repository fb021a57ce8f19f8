"""API key validation for the pricing endpoints.

Keys are shared secrets configured through the ADMIN_API_KEY environment
variable and compared in constant time.
"""

import hmac


class APIKeyValidator:
    """Validates the X-API-Key header sent by the order form and admin tools."""

    def __init__(self, api_keys: list[str]) -> None:
        """Initialize validator with the accepted keys.

        Args:
            api_keys: Accepted API key strings; blank entries are ignored

        Raises:
            ValueError: If no non-blank key is provided
        """
        keys = [key.strip() for key in api_keys if key and key.strip()]
        if not keys:
            raise ValueError("At least one API key must be provided")

        self.api_keys = tuple(keys)

    def validate(self, api_key: str) -> bool:
        """Check an API key against every accepted key.

        Args:
            api_key: The key sent by the caller

        Returns:
            bool: True if the key is accepted, False otherwise
        """
        candidate = api_key.encode()
        matched = False
        for key in self.api_keys:
            # No early exit, so timing does not reveal which key matched
            matched |= hmac.compare_digest(candidate, key.encode())
        return matched

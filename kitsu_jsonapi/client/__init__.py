"""Request preparation for a JSON:API transport."""

from .builder import JSONAPIRequestBuilder, PreparedRequest

__all__ = ["JSONAPIRequestBuilder", "PreparedRequest"]

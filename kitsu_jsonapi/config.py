"""Client configuration for the JSON:API transformers."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://kitsu.io/api/edge"
DEFAULT_TIMEOUT = 30.0


class JSONAPISettings(BaseSettings):
    """Options read by the transformers and handed to the transport.

    Only ``decamelize`` and ``pluralize`` affect serialisation and
    deserialisation; the remaining fields are carried on prepared requests.
    """

    model_config = SettingsConfigDict(env_prefix="KITSU_", frozen=True, extra="ignore")

    decamelize: bool = Field(
        default=True,
        description="Convert camelCase model names into hyphenated wire names.",
    )
    pluralize: bool = Field(
        default=True,
        description="Pluralise model names when building resource types and paths.",
    )
    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    headers: dict[str, str] = Field(default_factory=dict)


@lru_cache
def get_settings() -> JSONAPISettings:
    """Return the default settings built from the environment."""
    return JSONAPISettings()

"""
Configuration of a single udpecho invocation
"""

import typing as t
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from udpecho.types import NetAddress


class EchoConfig(BaseModel):
    "Echo configuration, immutable once parsed"
    model_config = ConfigDict(frozen=True)

    server: bool = False
    host: str = Field("127.0.0.1", min_length=1)
    port: int = Field(1337, ge=0, le=65535)
    log_level: t.Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    @property
    def endpoint(self) -> NetAddress:
        return (self.host, self.port)


def load_config(**options) -> EchoConfig:
    "Build the configuration, leaving unset options at their defaults"

    try:
        return EchoConfig(**{k: v for k, v in options.items() if v is not None})

    except ValidationError as err:
        raise ValueError(f"Invalid configuration: {err}") from err

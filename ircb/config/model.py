from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..constants import DEFAULT_CHANNEL, DEFAULT_HOST, IRC_PLAIN_PORT, IRC_SECURE_PORT


class ConnectionConfig(BaseModel):
    """Settings for one IRC connection.

    Attributes:
        host: Server hostname. Defaults to freenode over TLS when omitted.
        port: Server port. 0 selects 6697 for TLS and 6667 otherwise.
        secure: Connect over TLS.
        reject_unauthorized: Verify the server certificate when secure.
        nick: Nickname sent during registration.
        password: Optional server password (``PASS``).
        username: Optional username for ``USER``.
        real_name: Optional real name for ``USER``.
        channels: Channels joined once the MOTD has been received. ``None``
            when not configured.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    host: str = DEFAULT_HOST
    port: int = Field(default=0, ge=0, le=65535)
    secure: bool = False
    reject_unauthorized: bool = Field(default=False, alias="rejectUnauthorized")
    nick: str | None = None
    password: str | None = None
    username: str | None = None
    real_name: str | None = Field(default=None, alias="realName")
    channels: tuple[str, ...] | None = None

    @model_validator(mode="before")
    @classmethod
    def apply_defaults(cls, data: Any) -> Any:
        """Fill in host, TLS and channel defaults.

        No host means the default network over TLS; connecting to the
        default network without channels joins the default channel.
        """
        if not isinstance(data, Mapping):
            return data
        values = dict(data)
        if not values.get("host"):
            values["host"] = DEFAULT_HOST
            values["secure"] = True
        if values.get("channels") is None and values["host"] == DEFAULT_HOST:
            values["channels"] = [DEFAULT_CHANNEL]
        return values

    @model_validator(mode="after")
    def resolve_port(self) -> ConnectionConfig:
        """Port 0 means unset: pick the TLS or plain port from the parsed ``secure``."""
        if self.port == 0:
            # Frozen model; set once during validation
            object.__setattr__(self, "port", IRC_SECURE_PORT if self.secure else IRC_PLAIN_PORT)
        return self

    @field_validator("channels", mode="before")
    @classmethod
    def validate_channels(cls, v: Any) -> Any:
        """Accept a comma separated string or a list; strip blanks, keep order."""
        if v is None:
            return None
        if isinstance(v, str):
            v = v.split(",")
        if not isinstance(v, list | tuple):
            raise ValueError("channels must be a list")
        validated = []
        for c in v:
            if isinstance(c, str) and c.strip():
                validated.append(c.strip())
        return tuple(dict.fromkeys(validated))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ConnectionConfig:
        """Create a config from a plain mapping, dropping ``None`` values."""
        return cls.model_validate({k: v for k, v in data.items() if v is not None})

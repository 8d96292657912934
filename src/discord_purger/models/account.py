"""Account, guild and DM channel models returned by the /users/@me endpoints."""

from pydantic import BaseModel, ConfigDict


class Account(BaseModel):
    """A Discord user, as returned by /users/@me or in DM recipient lists."""

    model_config = ConfigDict(extra="allow")

    id: str
    username: str
    global_name: str | None = None
    discriminator: str | None = None
    avatar: str | None = None
    bot: bool = False


class Guild(BaseModel):
    """Partial guild entry from /users/@me/guilds."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    icon: str | None = None
    owner: bool = False


class DMChannel(BaseModel):
    """Direct-message or group-DM channel from /users/@me/channels."""

    model_config = ConfigDict(extra="allow")

    id: str
    type: int | None = None
    name: str | None = None
    last_message_id: str | None = None
    recipients: list[Account] = []

import attrs


@attrs.define
class UserEntity:
    """Caller identity decoded from a verified bearer token."""

    id: int
    email: str = ''
    is_admin: bool = False

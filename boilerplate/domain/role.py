import enum


class Role(str, enum.Enum):
    """Closed set of roles controlling authorization scope."""

    admin = "admin"
    manager = "manager"
    guest = "guest"

import ulid


def new_ref() -> str:
    """
    Generates the local correlation key of a graph element.

    A ULID: 26 Crockford base32 characters (48-bit millisecond timestamp +
    80 random bits), minted locally with no round trip. Unique for the
    editing session; the persisted id comes from the server later.
    """
    return ulid.new().str


def new_id(prefix: str = "") -> str:
    """Prefixed local id, e.g. new_id("wf_")."""
    return prefix + new_ref()

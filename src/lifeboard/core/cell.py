"""Cell states and border policies."""

from enum import Enum, IntEnum


class Cell(IntEnum):
    """State of a single grid position."""

    DEAD = 0
    ALIVE = 1

    def __str__(self) -> str:
        return "▓▓" if self is Cell.ALIVE else "░░"


class BorderPolicy(Enum):
    """How neighbour lookups beyond the grid edge are resolved.

    DEAD treats missing neighbours as dead, ALIVE treats them as alive,
    and WRAP joins opposite edges so the board behaves as a torus.
    """

    DEAD = "dead"
    ALIVE = "alive"
    WRAP = "wrap"

    @classmethod
    def from_name(cls, name: str) -> "BorderPolicy":
        """Resolve a border keyword, case-insensitively.

        Besides the policy values, the aliases ``empty``, ``solid`` and
        ``loop`` are accepted.

        Raises:
            ValueError: If the keyword is unknown
        """
        key = name.strip().lower()
        policy = _BORDER_ALIASES.get(key)
        if policy is None:
            raise ValueError(f"Unknown border policy '{name}'")
        return policy


_BORDER_ALIASES = {
    "dead": BorderPolicy.DEAD,
    "empty": BorderPolicy.DEAD,
    "alive": BorderPolicy.ALIVE,
    "solid": BorderPolicy.ALIVE,
    "wrap": BorderPolicy.WRAP,
    "loop": BorderPolicy.WRAP,
}

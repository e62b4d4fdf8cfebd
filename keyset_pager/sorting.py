"""Sort specification for keyset pagination."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from .errors import ConfigError, ValidationError


class Order(str, Enum):
    """Sort direction of a single key."""

    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, token: Union["Order", str]) -> "Order":
        """Parse a direction token such as ``"asc"`` or ``"DESC"``.

        Raises:
            ValidationError: If the token is not a known direction
        """
        if isinstance(token, cls):
            return token
        if isinstance(token, str):
            try:
                return cls(token.strip().upper())
            except ValueError:
                pass
        raise ValidationError(f"Unknown sort order: {token!r} (expected ASC or DESC)")

    def inverted(self) -> "Order":
        return Order.DESC if self is Order.ASC else Order.ASC


@dataclass(frozen=True)
class SortKey:
    """One ordering column and its direction."""

    name: str
    order: Order = Order.ASC

    def inverted(self) -> "SortKey":
        return SortKey(self.name, self.order.inverted())


def _make_key(name: str, order: Union[Order, str], role: str) -> SortKey:
    if not name:
        raise ConfigError(f"{role} sort column name can not be empty")
    return SortKey(name, Order.parse(order))


class SortSpec:
    """Primary sort key plus an optional backup (tie-break) key.

    The primary key must be set before a SortSpec is used for pagination. The
    backup key should be unique per row (typically the primary key of the
    table) so that rows sharing a primary value still have a stable order.

    Example:
        spec = SortSpec().set_primary("created_at", "DESC").set_backup("id", "DESC")
    """

    def __init__(self, primary: Optional[SortKey] = None, backup: Optional[SortKey] = None):
        self._primary = primary
        self._backup = backup

    def set_primary(self, name: str, order: Union[Order, str] = Order.ASC) -> "SortSpec":
        """Set the primary sort.

        Raises:
            ConfigError: If the column name is empty
            ValidationError: If the order is not recognised
        """
        self._primary = _make_key(name, order, "Primary")
        return self

    def set_backup(self, name: str, order: Union[Order, str] = Order.ASC) -> "SortSpec":
        """Set the backup sort used to break ties on the primary key."""
        self._backup = _make_key(name, order, "Backup")
        return self

    @property
    def primary(self) -> Optional[SortKey]:
        return self._primary

    @property
    def backup(self) -> Optional[SortKey]:
        return self._backup

    def require_primary(self) -> SortKey:
        if self._primary is None:
            raise ConfigError("Primary sort must be set first")
        return self._primary

    @property
    def primary_name(self) -> str:
        return self.require_primary().name

    @property
    def primary_order(self) -> Order:
        return self.require_primary().order

    @property
    def backup_name(self) -> Optional[str]:
        return self._backup.name if self._backup else None

    @property
    def backup_order(self) -> Optional[Order]:
        return self._backup.order if self._backup else None

    def keys(self) -> Tuple[SortKey, ...]:
        """Configured keys, primary first."""
        primary = self.require_primary()
        return (primary, self._backup) if self._backup else (primary,)

    def inverted(self) -> "SortSpec":
        """Return a new spec with every direction flipped."""
        primary = self.require_primary()
        backup = self._backup.inverted() if self._backup else None
        return SortSpec(primary.inverted(), backup)

    def __eq__(self, other):
        if not isinstance(other, SortSpec):
            return NotImplemented
        return (self._primary, self._backup) == (other._primary, other._backup)

    def __repr__(self):
        return f"SortSpec(primary={self._primary!r}, backup={self._backup!r})"

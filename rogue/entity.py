from typing import Any, Dict, Optional, Protocol

from .errors import MovementError
from .geometry import Rectangle


class MoveHandler(Protocol):
    """
    Decides whether an entity may move to (x, y) and commits the move if so.

    Entities never change their own position. Every move request goes through
    the handler they were built with, which owns the collision rules and the
    bookkeeping (such as re-indexing) that has to happen with the move.
    """

    def validate_and_apply(self, entity: "Entity", x: int, y: int) -> bool:
        ...


class Entity(Rectangle):
    """
    A positioned game object, unit-sized unless told otherwise.

    Entities compare by identity: two entities standing on the same cell are
    still two entities.
    """

    def __init__(
        self,
        x: int,
        y: int,
        move_handler: Optional[MoveHandler] = None,
        width: int = 1,
        height: int = 1,
        colliding: bool = False,
        name: str = "",
    ) -> None:
        super().__init__(x, y, width, height)
        self.move_handler: Optional[MoveHandler] = move_handler
        self._colliding: bool = colliding
        self.name: str = name
        self.components: Dict[str, Any] = {}

    def __repr__(self) -> str:
        label = f"{self.name!r}, " if self.name else ""
        return f"Entity({label}x={self.x}, y={self.y}, colliding={self._colliding})"

    def move_by(self, dx: int, dy: int) -> bool:
        """Request a move by (dx, dy). Returns True if the handler committed it."""
        return self.move_to(self.x + dx, self.y + dy)

    def move_to(self, x: int, y: int) -> bool:
        """Request a move to (x, y). Returns True if the handler committed it."""
        if self.move_handler is None:
            raise MovementError(f"{self!r} has no move handler")
        return self.move_handler.validate_and_apply(self, x, y)

    def on_collision_start(self, other: Optional["Entity"] = None) -> None:
        self._colliding = True

    def on_collision_end(self) -> None:
        self._colliding = False

    def get_component(self, name: str, default: Any = None) -> Any:
        return self.components.get(name, default)

    def set_component(self, name: str, component: Any) -> None:
        """Attach component under name, replacing any previous one; None detaches."""
        if component is None:
            self.components.pop(name, None)
        else:
            self.components[name] = component

    @property
    def is_colliding(self) -> bool:
        return self._colliding

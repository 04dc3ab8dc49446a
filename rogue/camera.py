from .geometry import Point, Rectangle


class Camera:
    """A viewport of fixed size centered on a movable position."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"camera size must be positive, got {width}x{height}")
        self.position: Point = Point(x, y)
        self.width: int = width
        self.height: int = height

    def __repr__(self) -> str:
        return f"Camera(position={self.position}, viewport={self.viewport()!r})"

    def move_by(self, dx: int, dy: int) -> None:
        self.position.set_xy(self.position.x + dx, self.position.y + dy)

    def move_to(self, x: int, y: int) -> None:
        self.position.set_xy(x, y)

    def viewport(self) -> Rectangle:
        """The visible region, centered on the camera position."""
        return Rectangle(
            self.position.x - self.width // 2,
            self.position.y - self.height // 2,
            self.width,
            self.height,
        )

    def clamp_to_bounds(self, bounds: Rectangle) -> None:
        """
        Pull the camera back so the viewport stays inside bounds.

        On an axis where bounds is smaller than the viewport the camera
        centers on bounds instead.
        """
        view = self.viewport()
        x, y = self.position.xy

        if bounds.width <= self.width:
            x = bounds.center()[0]
        elif view.left < bounds.left:
            x += bounds.left - view.left
        elif view.right > bounds.right:
            x -= view.right - bounds.right

        if bounds.height <= self.height:
            y = bounds.center()[1]
        elif view.top < bounds.top:
            y += bounds.top - view.top
        elif view.bottom > bounds.bottom:
            y -= view.bottom - bounds.bottom

        self.position.set_xy(x, y)

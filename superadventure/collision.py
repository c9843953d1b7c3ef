from superadventure.settings import LANDING_TOLERANCE


class Box:
    """Bare axis-aligned rectangle, used for footing checks."""

    def __init__(self, x, y, width, height):
        self.x = x
        self.y = y
        self.width = width
        self.height = height

    def __repr__(self):
        return f"Box({self.x}, {self.y}, {self.width}, {self.height})"


def overlaps(a, b):
    # touching edges do not count
    return (a.x < b.x + b.width and
            a.x + a.width > b.x and
            a.y < b.y + b.height and
            a.y + a.height > b.y)


def resolve(mover, obstacle, tolerance=LANDING_TOLERANCE):
    """Push an overlapping mover out of a static obstacle.

    The mover's velocity is the displacement it made this tick, so
    subtracting it gives the edges before the move. Landing wins over
    ceiling, ceiling wins over a side push. Returns "land", "ceiling",
    "side" or None.
    """
    if mover.vel_y > 0 and mover.y + mover.height - mover.vel_y <= obstacle.y + tolerance:
        mover.y = obstacle.y - mover.height
        mover.vel_y = 0
        mover.on_ground = True
        return "land"
    if mover.vel_y < 0 and mover.y - mover.vel_y >= obstacle.y + obstacle.height - tolerance:
        mover.y = obstacle.y + obstacle.height
        mover.vel_y = 0
        return "ceiling"
    if mover.vel_x != 0:
        if mover.vel_x > 0:
            mover.x = obstacle.x - mover.width
        else:
            mover.x = obstacle.x + obstacle.width
        mover.vel_x = 0
        return "side"
    return None


def footing(entity, depth):
    """Thin box directly under an entity's feet."""
    return Box(entity.x, entity.y + entity.height, entity.width, depth)


def find_support(entity, platforms, depth):
    below = footing(entity, depth)
    for platform in platforms:
        if overlaps(below, platform):
            return platform
    return None

from enum import Enum

class Direction(Enum):
    UP = 'UP'    # computation proceeds upstream, distances are negative
    DN = 'DN'    # computation proceeds downstream

class ControlSection:
    """Section at which the flow depth is known and from which the profile is computed.
    """
    def __init__(self,
                 depth: float,
                 direction: Direction | str = Direction.DN,
                 chainage: int | float = 0):
        """Initializes a control section.

        Args:
            depth (float): Known flow depth [m].
            direction (Direction | str, optional): Whether the computation proceeds upstream ('UP')
            or downstream ('DN') of the section. Defaults to Direction.DN.
            chainage (int | float, optional): Distance assigned to the section. Defaults to 0.
        """
        if depth <= 0:
            raise ValueError("Control depth must be positive.")

        try:
            self.direction = Direction(direction)
        except ValueError:
            raise ValueError("Invalid direction. Should be 'UP' or 'DN'.") from None

        self.depth = depth
        self.chainage = chainage

    def signed_step(self, spatial_step: int | float) -> float:
        """Returns the spatial step with the sign of the computation direction.

        Args:
            spatial_step (int | float): Step length [m].

        Returns:
            float: -|dx| upstream, |dx| downstream.
        """
        if spatial_step <= 0:
            raise ValueError("Spatial step must be positive.")

        return -spatial_step if self.direction is Direction.UP else spatial_step

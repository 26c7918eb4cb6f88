"""Domain errors — raised by value objects, policies and use cases."""


class InvalidCoordinateError(ValueError):
    """Latitude/longitude missing, non-numeric, non-finite or out of range."""


class InvalidRadiusError(ValueError):
    """Search radius missing (with no default), non-positive or non-finite."""


class EntityNotFoundError(LookupError):
    def __init__(self, entity_id: int):
        super().__init__(f"Entity {entity_id} not found")
        self.entity_id = entity_id

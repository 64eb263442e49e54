"""Market - metadata needed to scale raw prices."""

from pydantic import BaseModel


class Market(BaseModel):
    """Market descriptor. Only decimal_places matters for the export; non-positive means unscaled."""

    id: str
    name: str = ""
    decimal_places: int = 0

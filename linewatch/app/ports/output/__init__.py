from .feed_source import IFeedSource
from .vehicle_position_provider import IVehiclePositionProvider

__all__ = [
    "IFeedSource",
    "IVehiclePositionProvider",
]

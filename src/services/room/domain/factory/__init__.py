from .room_factory import RoomDetails as RoomDetails
from .room_factory import RoomFactory as RoomFactory

from .room import Room as Room
from .room import RoomPatch as RoomPatch

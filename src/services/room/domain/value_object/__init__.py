from .room_id import RoomId as RoomId
from .room_number import RoomNumber as RoomNumber

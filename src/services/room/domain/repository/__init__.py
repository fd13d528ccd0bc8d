from .room_repository import RoomCriteria as RoomCriteria
from .room_repository import RoomRepository as RoomRepository

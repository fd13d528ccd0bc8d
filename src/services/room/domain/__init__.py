from .entity import Room as Room
from .entity import RoomPatch as RoomPatch
from .factory import RoomDetails as RoomDetails
from .factory import RoomFactory as RoomFactory
from .repository import RoomCriteria as RoomCriteria
from .repository import RoomRepository as RoomRepository
from .value_object import RoomId as RoomId
from .value_object import RoomNumber as RoomNumber

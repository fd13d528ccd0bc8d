from .reservation import Reservation as Reservation
from .reservation import ReservationPatch as ReservationPatch
from .room_schedule import RoomSchedule as RoomSchedule
